"""Blocks, transactions, BLAKE2s hashing, and reading linked chains from YAML."""