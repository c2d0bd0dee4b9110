"""Rules core: bitboards, Zobrist keys, board state, search and players"""
