"""
Plasma account tree core.

Fixed-depth sparse Merkle tree over account leaves, with a Pedersen hash
whose bit layout matches the proving circuit.

Subpackages:
    plasma.crypto   field elements, Baby Jubjub, Pedersen and sha256 backends
    plasma.codec    AccountLeaf and its canonical bit encoding
    plasma.merkle   SparseMerkleTree and authentication paths
    plasma.state    account hasher and account tree factory
    plasma.config   circuit constants and hasher selection
    plasma.schemas  error taxonomy
"""

__version__ = "0.1.0"
