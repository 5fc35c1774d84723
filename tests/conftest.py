"""Shared fixtures for whitelist tests."""

import pytest

# Hardhat default accounts
USER1 = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
USER2 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
USER3 = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
USER4 = "0x90F79bf6EB2c4f870365E785982E1f101E93b906"
USER5 = "0xBD26367c4B23A6D3713A1e1a50B2D67E8748cB98"

NOT_LISTED = "0x1234567890123456789012345678901234567890"


def make_addresses(n):
    """n distinct lower-case addresses: 0x00..01, 0x00..02, ..."""
    return ["0x%040x" % (i + 1) for i in range(n)]


@pytest.fixture
def users():
    return [USER1, USER2, USER3, USER4, USER5]


@pytest.fixture
def outsider():
    return NOT_LISTED


CONTRACT_A = "0x" + "aa" * 20
CONTRACT_B = "0x" + "bb" * 20


class FakeCall:
    def __init__(self, owners, token_id):
        self.owners = owners
        self.token_id = token_id

    def call(self):
        owner = self.owners.get(self.token_id)
        if owner is None:
            raise ValueError("execution reverted: ERC721: invalid token ID")
        return owner


class FakeFunctions:
    def __init__(self, owners):
        self.owners = owners
        self.calls = []

    def ownerOf(self, token_id):
        self.calls.append(token_id)
        return FakeCall(self.owners, token_id)


class FakeContract:
    """Stands in for a web3 contract: ``contract.functions.ownerOf(i).call()``."""

    def __init__(self, address, owners):
        self.address = address
        self.functions = FakeFunctions(owners)


class FakeEth:
    def __init__(self, contracts):
        self.contracts = contracts
        self.requested = []

    def contract(self, address, abi):
        self.requested.append((address, abi))
        return self.contracts[address.lower()]


class FakeWeb3:
    def __init__(self, contracts):
        self.eth = FakeEth(contracts)
