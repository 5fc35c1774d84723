"""Error taxonomy for whitelist building, proofs and artifacts."""


class WhitelistError(Exception):
    """Base class for every error raised by this package."""


class InvalidIdentity(WhitelistError, ValueError):
    """A member string is not a well-formed address."""

    def __init__(self, member):
        self.member = member
        super().__init__(f"Invalid address: {member!r}")


class EmptyWhitelist(WhitelistError, ValueError):
    """A tree was requested over zero members."""

    def __init__(self):
        super().__init__("Cannot build a Merkle tree over an empty whitelist")


class NotAMember(WhitelistError, LookupError):
    """A proof was requested for an address that is not in the tree."""

    def __init__(self, member):
        self.member = member
        super().__init__(f"Address {member!r} is NOT in the whitelist")


class HashFunctionUnavailable(WhitelistError, RuntimeError):
    """No keccak256 backend could be loaded."""


class ArtifactError(WhitelistError, ValueError):
    """A root or proofs document could not be read."""


class OwnerLookupError(WhitelistError, RuntimeError):
    """An ``ownerOf`` call against a token contract failed."""

    def __init__(self, contract_address, token_id, cause):
        self.contract_address = contract_address
        self.token_id = token_id
        super().__init__(f"ownerOf({token_id}) failed on {contract_address}: {cause}")
