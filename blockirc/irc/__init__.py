"""HTTP chat relay server and client with local SQLite message storage."""