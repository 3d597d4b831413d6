"""Schema bootstrapper — Startup probe, index creation and mapping application.

Runs once per service before it is handed to the application:
  1. Load the bundled field mapping (a failure leaves no mapping)
  2. Probe the backend; with no reachable node, close the gate and stop
  3. Create the target index when it is missing
  4. Apply the mapping and log whether it was acknowledged

Failures in steps 3 and 4 are logged and leave the gate open: the backend
answered the probe, so writes are still attempted.
"""

from __future__ import annotations

import json
import logging
from importlib import resources

from pydantic import BaseModel, Field

from indexsync.backends.base import IndexBackend
from indexsync.core.gate import AvailabilityGate
from indexsync.models.document import IndexDescriptor

logger = logging.getLogger(__name__)

_RESOURCE_PACKAGE = "indexsync.resources"


class BootstrapReport(BaseModel):
    """What a bootstrap run did."""

    available: bool = Field(default=False, description="Gate value after the probe")
    nodes: list[str] = Field(default_factory=list, description="Reachable node names")
    index_created: bool = Field(default=False, description="Whether the index had to be created")
    mapping_applied: bool | None = Field(
        default=None,
        description="Backend acknowledgement of the mapping (None when not attempted)",
    )
    error: str | None = Field(default=None, description="Failure during index setup, if any")


def load_mapping(resource_name: str, package: str = _RESOURCE_PACKAGE) -> bytes | None:
    """Read a bundled mapping file.

    Returns:
        The raw JSON bytes, or None when the file is missing or not valid JSON.
    """
    try:
        data = resources.files(package).joinpath(resource_name).read_bytes()
        json.loads(data)
    except (OSError, ModuleNotFoundError, ValueError):
        logger.warning("Failed to read index mapping '%s'", resource_name, exc_info=True)
        return None
    return data


class SchemaBootstrapper:
    """Brings the target index into shape and sets the availability gate.

    Args:
        backend: Backend to probe and administer.
        gate: Gate updated from the probe result.
        descriptor: Index name, document type and mapping to apply.
    """

    def __init__(self, backend: IndexBackend, gate: AvailabilityGate, descriptor: IndexDescriptor) -> None:
        self.backend = backend
        self.gate = gate
        self.descriptor = descriptor

    async def run(self) -> BootstrapReport:
        """Probe the backend and ensure the index and mapping exist."""
        report = BootstrapReport()
        index = self.descriptor.index_name
        doc_type = self.descriptor.document_type

        try:
            nodes = await self.backend.probe()
        except Exception as e:
            logger.error("Probe of backend '%s' failed", self.backend.name, exc_info=True)
            report.error = str(e)
            nodes = set()

        if not nodes:
            self.gate.mark_unavailable("no reachable nodes at startup")
            await self.backend.close()
            logger.info("Search indexing disabled: backend '%s' has no reachable nodes", self.backend.name)
            return report

        self.gate.mark_available(nodes)
        report.available = True
        report.nodes = sorted(nodes)

        try:
            if not await self.backend.index_exists(index):
                await self.backend.create_index(index)
                report.index_created = True
                logger.info("Created index '%s'", index)

            if self.descriptor.mapping is None:
                logger.warning("No mapping available; skipping mapping for type '%s' in index '%s'", doc_type, index)
            else:
                acknowledged = await self.backend.put_mapping(index, doc_type, self.descriptor.mapping)
                report.mapping_applied = acknowledged
                logger.info(
                    "Adding mapping to type %s in index %s was %s at startup",
                    doc_type,
                    index,
                    "acknowledged" if acknowledged else "not acknowledged",
                )
        except Exception as e:
            report.error = str(e)
            logger.error("Failed to set up index '%s'", index, exc_info=True)

        return report
