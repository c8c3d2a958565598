from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from app.config import settings
from app.models.protocol import ProtocolActivity

logger = logging.getLogger("protocol_db")

_DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data" / "protocols"


class ProtocolDB:
    """Read-only protocol catalog, loaded from data/protocols/<chain>/<id>.json."""

    def __init__(self, data_dir: Path | None = None):
        self._data_dir = data_dir
        self._protocols: dict[str, ProtocolActivity] = {}
        self._by_chain: dict[str, list[ProtocolActivity]] = {}

    @property
    def data_dir(self) -> Path:
        if self._data_dir is not None:
            return self._data_dir
        if settings.protocols_dir:
            return Path(settings.protocols_dir)
        return _DATA_DIR

    def load(self) -> None:
        protocols: dict[str, ProtocolActivity] = {}
        by_chain: dict[str, list[ProtocolActivity]] = {}

        if not self.data_dir.is_dir():
            logger.error(f"Protocol directory not found: {self.data_dir}")
        else:
            for chain_dir in sorted(self.data_dir.iterdir()):
                if not chain_dir.is_dir() or chain_dir.name.startswith("."):
                    continue

                for proto_file in sorted(chain_dir.glob("*.json")):
                    try:
                        protocol = ProtocolActivity(**json.loads(proto_file.read_text()))
                    except (OSError, ValueError, ValidationError) as e:
                        logger.error(f"Failed to load {proto_file}: {e}")
                        continue
                    if protocol.id in protocols:
                        logger.warning(f"Duplicate protocol id '{protocol.id}' in {proto_file}")
                        continue
                    protocols[protocol.id] = protocol
                    by_chain.setdefault(protocol.chain.lower(), []).append(protocol)

        # Swap in whole so readers never see a half-loaded catalog
        self._protocols = protocols
        self._by_chain = by_chain
        logger.info(f"Loaded {self.count} protocols across chains: {self.chains}")

    def get(self, protocol_id: str) -> ProtocolActivity | None:
        return self._protocols.get(protocol_id)

    def get_many(self, protocol_ids: list[str]) -> list[ProtocolActivity]:
        return [self._protocols[pid] for pid in protocol_ids if pid in self._protocols]

    def get_by_chain(self, chain: str) -> list[ProtocolActivity]:
        return list(self._by_chain.get(chain.lower(), []))

    def catalog(self, chain: str | None = None) -> list[ProtocolActivity]:
        if chain:
            return self.get_by_chain(chain)
        return self.all_protocols()

    def all_protocols(self) -> list[ProtocolActivity]:
        return list(self._protocols.values())

    @property
    def chains(self) -> list[str]:
        return sorted(self._by_chain)

    @property
    def count(self) -> int:
        return len(self._protocols)


protocol_db = ProtocolDB()
