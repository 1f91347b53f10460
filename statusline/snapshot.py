"""Render snapshot decoding.

The host pipes one JSON document per render. It is decoded once, here, into
a frozen RenderSnapshot with an explicit default for every optional field.
JSON nulls are treated as absent.
"""

import json
import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

log = logging.getLogger(__name__)


class _SnapshotModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat null fields as missing so their defaults apply."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ModelInfo(_SnapshotModel):
    display_name: str = ""


class Workspace(_SnapshotModel):
    current_dir: str = ""
    project_dir: str = ""


class AgentInfo(_SnapshotModel):
    name: str = ""


class VimInfo(_SnapshotModel):
    mode: str = ""


class CostInfo(_SnapshotModel):
    total_cost_usd: float = 0.0


class CurrentUsage(_SnapshotModel):
    """Token breakdown of the current context window."""

    input_tokens: Optional[float] = None
    cache_creation_input_tokens: float = 0
    cache_read_input_tokens: float = 0


class ContextWindow(_SnapshotModel):
    context_window_size: float = 0
    used_percentage: Optional[float] = None
    current_usage: Optional[CurrentUsage] = None


class RenderSnapshot(_SnapshotModel):
    """Everything the host tells us about one render frame."""

    model: ModelInfo = ModelInfo()
    workspace: Workspace = Workspace()
    cwd: str = ""
    agent: AgentInfo = AgentInfo()
    vim: VimInfo = VimInfo()
    session_id: str = ""
    cost: CostInfo = CostInfo()
    context_window: ContextWindow = ContextWindow()

    @property
    def current_dir(self) -> str:
        return self.workspace.current_dir or self.cwd

    @property
    def project_dir(self) -> str:
        """Project directory, defaulting to the current directory."""
        return self.workspace.project_dir or self.current_dir

    @property
    def model_name(self) -> str:
        return self.model.display_name

    @property
    def agent_name(self) -> str:
        return self.agent.name

    @property
    def vim_mode(self) -> str:
        return self.vim.mode

    @property
    def total_cost(self) -> float:
        return self.cost.total_cost_usd


def decode_snapshot(raw: str) -> RenderSnapshot:
    """Decode the host's JSON document.

    Args:
        raw: The text read from stdin.

    Returns:
        The decoded snapshot, or an all-defaults snapshot if the input is
        empty, not JSON, or fails validation.
    """
    if not raw.strip():
        return RenderSnapshot()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        log.debug(f"Snapshot is not valid JSON: {e}")
        return RenderSnapshot()

    try:
        return RenderSnapshot.model_validate(data)
    except ValidationError as e:
        log.debug(f"Snapshot failed validation: {e}")
        return RenderSnapshot()
