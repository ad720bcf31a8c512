"""Core orchestration of scanning and watching."""

from strata_fs.core.workspace_service import WorkspaceService

__all__ = ["WorkspaceService"]
