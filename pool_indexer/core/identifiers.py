"""Identifier Builder — deterministic byte identifiers for every stored record.

Invariants:
    - Same inputs always produce the same identifier (idempotent re-processing)
    - log_record_id: tx_hash bytes || uint32 big-endian log index
      -> unique per raw event (a log index is unique within its transaction)
    - owned_record_id: owner bytes || uint64 big-endian block || uint32 big-endian log index
      -> unique per (owning entity, event) (a log index is unique within its block)
    - Fixed-width encodings: no two distinct coordinate tuples share a byte string
    - Pure functions; raise IdentifierError only on malformed input

Design Decisions:
    - Bytes internally, 0x-hex at the storage boundary: hex keys are readable in
      SQL consoles and API responses
"""

from pool_indexer.core.domain_types import (
    ADDRESS_BYTES, TX_HASH_BYTES, Address, RecordKey, TxHash,
)
from pool_indexer.core.errors import IdentifierError

LOG_INDEX_BYTES = 4
BLOCK_NUMBER_BYTES = 8


def parse_hex(value: str, field: str = "value") -> bytes:
    """Decode a 0x-prefixed (or bare) hex string into bytes."""
    if not isinstance(value, str):
        raise IdentifierError(f"{field} must be a hex string", field)
    digits = value[2:] if value[:2].lower() == "0x" else value
    if len(digits) % 2:
        raise IdentifierError(f"{field} has an odd number of hex digits", field)
    try:
        return bytes.fromhex(digits)
    except ValueError:
        raise IdentifierError(f"{field} is not valid hex: {value!r}", field)


def to_record_key(raw: bytes) -> RecordKey:
    """Render a byte identifier as the lowercase 0x-hex storage key."""
    return RecordKey("0x" + raw.hex())


def normalize_address(value: str) -> Address:
    """Canonical lowercase form of a 20-byte address."""
    raw = parse_hex(value, "address")
    if len(raw) != ADDRESS_BYTES:
        raise IdentifierError(
            f"address must be {ADDRESS_BYTES} bytes, got {len(raw)}", "address",
        )
    return Address(to_record_key(raw))


def normalize_tx_hash(value: str) -> TxHash:
    raw = parse_hex(value, "tx_hash")
    if len(raw) != TX_HASH_BYTES:
        raise IdentifierError(
            f"tx_hash must be {TX_HASH_BYTES} bytes, got {len(raw)}", "tx_hash",
        )
    return TxHash(to_record_key(raw))


def _encode_uint(value: int, width: int, field: str) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise IdentifierError(f"{field} must be an integer", field)
    try:
        return value.to_bytes(width, "big", signed=False)
    except OverflowError:
        raise IdentifierError(
            f"{field} {value} does not fit in {width} unsigned bytes", field,
        )


def log_record_id(tx_hash: str, log_index: int) -> bytes:
    """Identifier for a record created once per raw event (audit entry, pool transaction)."""
    return parse_hex(tx_hash, "tx_hash") + _encode_uint(
        log_index, LOG_INDEX_BYTES, "log_index",
    )


def owned_record_id(owner: str, block_number: int, log_index: int) -> bytes:
    """Identifier for a record owned by an entity, created once per event (snapshots)."""
    return (
        parse_hex(owner, "owner")
        + _encode_uint(block_number, BLOCK_NUMBER_BYTES, "block_number")
        + _encode_uint(log_index, LOG_INDEX_BYTES, "log_index")
    )


def log_record_key(tx_hash: str, log_index: int) -> RecordKey:
    return to_record_key(log_record_id(tx_hash, log_index))


def owned_record_key(owner: str, block_number: int, log_index: int) -> RecordKey:
    return to_record_key(owned_record_id(owner, block_number, log_index))
