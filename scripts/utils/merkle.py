"""
Merkle allocations for MerkleRedeem style reward pools.

A leaf is `keccak256(abi.encodePacked(account, balance))` and parents hash the
sorted pair of their children, which is what OpenZeppelin's `MerkleProof.verify`
expects. A node without a sibling is carried to the next level unchanged.
"""
from eth_abi.packed import encode_packed
from eth_utils import keccak, to_checksum_address


def leaf_hash(account, balance):
    return keccak(encode_packed(["address", "uint256"], [to_checksum_address(str(account)), balance]))


def hash_pair(a, b):
    return keccak(a + b) if a <= b else keccak(b + a)


def verify(proof, root, leaf):
    computed = leaf
    for sibling in proof:
        computed = hash_pair(computed, sibling)
    return computed == root


class MerkleTree:
    def __init__(self, allocations):
        """`allocations` is an iterable of `(account, balance)` pairs."""
        self._leaves = [leaf_hash(account, balance) for account, balance in allocations]
        if not self._leaves:
            raise ValueError("Cannot build a merkle tree without allocations")

        self._layers = [self._leaves]
        while len(self._layers[-1]) > 1:
            self._layers.append(self._next_layer(self._layers[-1]))

    @staticmethod
    def _next_layer(nodes):
        layer = []
        for i in range(0, len(nodes), 2):
            if i + 1 < len(nodes):
                layer.append(hash_pair(nodes[i], nodes[i + 1]))
            else:
                layer.append(nodes[i])
        return layer

    @property
    def root(self):
        return self._layers[-1][0]

    @property
    def hex_root(self):
        return "0x" + self.root.hex()

    def proof(self, account, balance):
        leaf = leaf_hash(account, balance)
        try:
            index = self._leaves.index(leaf)
        except ValueError:
            raise KeyError(f"No allocation of {balance} for {account}") from None

        proof = []
        for layer in self._layers[:-1]:
            sibling = index ^ 1
            if sibling < len(layer):
                proof.append(layer[sibling])
            index //= 2
        return proof

    def hex_proof(self, account, balance):
        return ["0x" + node.hex() for node in self.proof(account, balance)]
