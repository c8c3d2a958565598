import re

_EVM_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")
_SOLANA_ADDRESS = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


def validate_evm_address(address: str) -> bool:
    return bool(_EVM_ADDRESS.match(address))


def validate_solana_address(address: str) -> bool:
    """Base58, 32-44 chars."""
    return bool(_SOLANA_ADDRESS.match(address))


def validate_wallet_address(address: str) -> bool:
    if address.startswith("0x"):
        return validate_evm_address(address)
    return validate_solana_address(address)


def normalize_wallet_address(address: str) -> str:
    address = address.strip()
    if address.startswith("0x"):
        return address.lower()
    return address
