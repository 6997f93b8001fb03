"""Discovery pipeline orchestration."""

from .orchestrator import DiscoveryOrchestrator, PipelineStage

__all__ = ["DiscoveryOrchestrator", "PipelineStage"]
