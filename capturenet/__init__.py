"""capturenet — decentralization network analysis.

Treats a curated dataset of stablecoins, issuers, custodians, regulators
and people as a graph and answers structural questions over it: how far
an entity sits from the decentralized benchmark, which paths connect two
actors, and how concentrated control is across the whole network.
"""

__version__ = "0.1.0"
