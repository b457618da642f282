"""Solana helpers: account decoding and a keyword-scored knowledge base."""