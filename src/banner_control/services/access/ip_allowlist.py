from typing import FrozenSet, Iterable, Optional

DEFAULT_ALLOWED_IPS = ("10.0.0.1", "10.0.0.2")

class IpAllowlist:
    """Source addresses that see every banner regardless of its display window."""
    def __init__(self, addresses: Iterable[str] = DEFAULT_ALLOWED_IPS):
        self._addresses: FrozenSet[str] = frozenset(addresses)

    @property
    def addresses(self) -> FrozenSet[str]:
        return self._addresses

    def is_allowed(self, ip_address: Optional[str]) -> bool:
        if ip_address is None:
            return False
        return ip_address in self._addresses
