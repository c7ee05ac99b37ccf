"""Error taxonomy for pool account decoding.

Every parse failure is a ``ParseError``. The dispatcher attaches the
originating protocol tag and program id before re-raising, so batch callers
can attribute failures without re-parsing.
"""

from typing import Optional

from solders.pubkey import Pubkey

from pool_decoder.models import protocol_name


class PoolDecoderError(Exception):
    """Base class for everything this package raises."""


class ParseError(PoolDecoderError):
    """A single account could not be turned into a UnifiedPool."""

    def __init__(
        self,
        message: str,
        protocol: Optional[str] = None,
        program_id: Optional[Pubkey] = None,
    ):
        super().__init__(message)
        self.message = message
        self.protocol = protocol
        self.program_id = program_id

    def attach(self, protocol: Optional[str], program_id: Pubkey) -> "ParseError":
        """Record where the failure came from. Returns self for re-raising."""
        if self.protocol is None:
            self.protocol = protocol
        if self.program_id is None:
            self.program_id = program_id
        return self

    def __str__(self) -> str:
        context = []
        if self.protocol is not None:
            context.append(f"protocol={protocol_name(self.protocol)}")
        if self.program_id is not None:
            context.append(f"program_id={self.program_id}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class UnsupportedProgram(ParseError):
    """The program id has no registered decoder."""

    def __init__(self, program_id: Pubkey):
        super().__init__(f"Unsupported program: {program_id}", program_id=program_id)


class InvalidKey(ParseError):
    """A program id or pool address is not a valid 32-byte key."""

    def __init__(self, field: str, value, reason: str):
        super().__init__(f"Invalid {field} {value!r}: {reason}")
        self.field = field
        self.value = value


class DecodeError(ParseError):
    """The raw bytes do not match the protocol's layout."""


class TruncatedAccount(DecodeError):
    def __init__(self, required: int, actual: int, protocol: Optional[str] = None):
        super().__init__(
            f"Account data too short: {actual} < {required} bytes",
            protocol=protocol,
        )
        self.required = required
        self.actual = actual


class UnknownLayoutVersion(DecodeError):
    """Discriminator not in the protocol's known layout table."""

    def __init__(self, discriminator: bytes, protocol: Optional[str] = None):
        super().__init__(
            f"Unknown layout discriminator: {discriminator.hex()}",
            protocol=protocol,
        )
        self.discriminator = bytes(discriminator)


class UninitializedPool(ParseError):
    """Bytes decoded cleanly but the account has not been set up as a pool."""

    def __init__(self, field: str, protocol: Optional[str] = None):
        super().__init__(f"Pool not initialized: {field} is unset", protocol=protocol)
        self.field = field


class EncoderNotRegistered(PoolDecoderError):
    """The program's codec has no encoder, so pools can't be written back."""

    def __init__(self, protocol: str, program_id: Pubkey):
        super().__init__(f"No encoder registered for {protocol_name(protocol)} ({program_id})")
        self.protocol = protocol
        self.program_id = program_id


class RegistrationError(PoolDecoderError):
    """Duplicate or conflicting protocol registration."""

    def __init__(self, program_id, reason: str):
        super().__init__(f"Cannot register {program_id}: {reason}")
        self.program_id = program_id
        self.reason = reason
