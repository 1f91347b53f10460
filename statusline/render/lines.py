"""Output composer.

Line 1: dir  model  ■⬓□ pct%  [$cost]  [⚙ agent]  [vim]  [Extra Usage]  [↑ update]
Line 2: ⎇ branch [✔ ~]  quota bars [reset times]  [⚡ extra usage]
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from statusline.cache.manager import CacheManager
from statusline.cache.models import GitStatusFact, UpdateFact, UsageFact
from statusline.config import CostDisplay, Palette, StatuslineConfig
from statusline.context import context_percent_for
from statusline.host import load_auto_compact_enabled
from statusline.render.bars import CONTEXT_BAR, render_bar
from statusline.render.colors import RESET, fg, hyperlink, paint
from statusline.render.gradient import display_gradient
from statusline.render.limits import (
    ExtraUsageState,
    extra_usage_state,
    render_extra_usage,
    render_quota_segment,
)
from statusline.snapshot import RenderSnapshot

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineInputs:
    """Everything needed to compose both lines, already resolved."""

    snapshot: RenderSnapshot
    context_pct: int
    git: GitStatusFact
    usage: Optional[UsageFact]
    update: UpdateFact
    first_render: bool
    now: datetime


def directory_label(project_dir: str, current_dir: str, palette: Palette) -> str:
    """Project name, plus where we are inside (or outside) it.

    myproj, myproj:src/pkg when below the project, myproj:other elsewhere.
    """
    project_dir = project_dir.rstrip("/") or project_dir
    current_dir = current_dir.rstrip("/") or current_dir
    name = os.path.basename(project_dir) or project_dir

    if current_dir and current_dir != project_dir:
        if current_dir.startswith(project_dir + "/"):
            where = current_dir[len(project_dir) + 1:]
        else:
            where = os.path.basename(current_dir)
        label = f"{name}{fg(palette.dim)}:{fg(palette.sand)}{where}"
    else:
        label = name

    return f"{fg(palette.sand)}{label}{RESET}"


def context_segment(pct: int, palette: Palette) -> str:
    gradient = display_gradient(pct)
    bar = render_bar(
        pct,
        CONTEXT_BAR,
        base_rgb=palette.neutral,
        gradient_rgb=gradient,
        empty_rgb=palette.dim_base,
        dim=palette.dim_base,
    )
    text = "COMPACT" if pct >= 100 else f"{pct}%"
    return f"{bar} {paint(text, gradient)}"


def git_segment(git: GitStatusFact, palette: Palette) -> str:
    if not git.has_repo:
        return paint("⎇ no git", palette.dimmer)
    if not git.branch:
        return f"{fg(palette.dimmer)}⎇ {fg(palette.dim)}detached{RESET}"

    label = paint(f"⎇ {git.branch}", palette.slate)
    if git.remote_url:
        label = hyperlink(git.remote_url, label)
    if git.staged_count > 0:
        label += " " + paint("✔", palette.sage)
    if git.modified_count > 0:
        label += " " + paint("~", palette.salmon)
    return label


def cost_segment(cost: float, palette: Palette) -> str:
    if cost <= 0:
        return ""
    return paint(f"${cost:.2f}", palette.dim)


def update_segment(update: UpdateFact, palette: Palette) -> str:
    if not update.has_update:
        return ""
    return paint(f"↑ {update.local_version} → {update.remote_version}", palette.amber)


def compose_lines(inputs: LineInputs, config: StatuslineConfig) -> tuple[str, str]:
    """Assemble both display lines."""
    palette = config.palette
    snapshot = inputs.snapshot

    state = ExtraUsageState.NONE
    if inputs.usage is not None:
        state = extra_usage_state(inputs.usage, config.thresholds.extra_near_pct)

    line1 = [
        directory_label(snapshot.project_dir, snapshot.current_dir, palette),
        paint(snapshot.model_name, palette.peach),
        context_segment(inputs.context_pct, palette),
    ]
    cost = cost_segment(snapshot.total_cost, palette)
    if cost and (config.cost_display is CostDisplay.ALWAYS or state is not ExtraUsageState.NONE):
        line1.append(cost)
    if snapshot.agent_name:
        line1.append(paint(f"⚙ {snapshot.agent_name}", palette.lavender))
    if snapshot.vim_mode:
        line1.append(paint(snapshot.vim_mode, palette.dim))
    if state is ExtraUsageState.ACTIVE:
        line1.append(paint("Extra Usage", palette.amber))
    update = update_segment(inputs.update, palette)
    if update:
        line1.append(update)

    line2 = [git_segment(inputs.git, palette)]
    if inputs.usage is not None:
        line2.append(
            render_quota_segment(
                inputs.usage,
                inputs.now,
                palette,
                config.thresholds,
                force_show=inputs.first_render,
            )
        )
        extra = render_extra_usage(state, inputs.usage, palette)
        if extra:
            line2.append(extra)

    return "  ".join(line1), "  ".join(line2)


def render_snapshot(
    snapshot: RenderSnapshot,
    manager: CacheManager,
    config: StatuslineConfig,
    now: Optional[datetime] = None,
) -> tuple[str, str]:
    """Resolve every fact for a snapshot and compose the two lines.

    Args:
        snapshot: Decoded host input.
        manager: Cache manager wired to the collaborators.
        config: Effective configuration.
        now: Current time; defaults to the wall clock.
    """
    now = now or datetime.now(timezone.utc)

    auto_compact = load_auto_compact_enabled(config.settings_path)
    context_pct = context_percent_for(
        snapshot.context_window, auto_compact, config.autocompact_buffer
    )

    first_render = manager.is_first_render_of_session(snapshot.session_id)
    inputs = LineInputs(
        snapshot=snapshot,
        context_pct=context_pct,
        git=manager.git_status(snapshot.project_dir),
        usage=manager.usage(),
        update=manager.update_info(snapshot.session_id),
        first_render=first_render,
        now=now,
    )
    log.debug(f"Rendering context={context_pct}% first_render={first_render}")
    return compose_lines(inputs, config)
