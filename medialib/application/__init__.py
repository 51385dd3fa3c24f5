"""Application layer: query engine, hierarchy builder, integrity rules, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (record store, fault injection).
"""
