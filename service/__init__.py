"""Per-request orchestration around the adapter layer."""

from service.orchestrator import ConnectionDescriptor, ErrorEnvelope, QueryOrchestrator

__all__ = ["ConnectionDescriptor", "ErrorEnvelope", "QueryOrchestrator"]
