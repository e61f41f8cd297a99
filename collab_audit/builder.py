"""Audit record assembly from a loosely-typed execution context.

The slug derived from the prompt names both the artifact and the audit_id.
Prompts that differ only in case or punctuation normalize to the same slug
and therefore the same file; the later write wins.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from .config import AuditSettings
from .errors import InvalidContext
from .models import (
    AuditRecord,
    ExecutionContext,
    ExecutionEvidence,
    MeshIntelligence,
)

_DISALLOWED = re.compile(r"[^a-z0-9\s]")


def audit_slug(prompt: str, max_tokens: int = 8) -> str:
    """Derive the filename-safe identifier for a prompt.

    "Deploy Wave 3 Now!" -> "deploy-wave-3-now"
    """
    cleaned = _DISALLOWED.sub("", prompt.lower())
    return "-".join(cleaned.split()[:max_tokens])


def audit_filename(record: AuditRecord, max_tokens: int = 8) -> str:
    """Filename for a record: <YYYY-MM-DD>-<slug>.json, day taken from record.date."""
    return f"{record.date[:10]}-{audit_slug(record.user_prompt, max_tokens)}.json"


def parse_context(context: ExecutionContext | Mapping[str, Any]) -> ExecutionContext:
    if isinstance(context, ExecutionContext):
        return context
    if not isinstance(context, Mapping):
        raise InvalidContext(f"execution context must be a mapping, got {type(context).__name__}")
    try:
        return ExecutionContext.model_validate(dict(context))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'context'}: {err['msg']}" for err in exc.errors()
        )
        raise InvalidContext(f"invalid execution context: {problems}") from exc


def build_audit_record(
    context: ExecutionContext | Mapping[str, Any],
    *,
    now: datetime | None = None,
    settings: AuditSettings | None = None,
) -> AuditRecord:
    """Shape a context into a fully-defaulted AuditRecord.

    ``now`` is sampled once; both the ISO date and the filename day derive
    from it. Raises InvalidContext when the prompt is missing or blank.
    """
    settings = settings or AuditSettings()
    ctx = parse_context(context)
    instant = now or datetime.now(timezone.utc)
    slug = audit_slug(ctx.user_prompt, settings.slug_max_tokens)

    evidence = ExecutionEvidence(
        bootstrap_routing=ctx.bootstrap,
        atlas_retrieval=ctx.atlas,
        mesh_intelligence=MeshIntelligence(**ctx.mesh.model_dump(), consensus=ctx.consensus),
        echelon_athena_dialogue=ctx.athena,
        colonel_deployment=ctx.colonels,
    )

    return AuditRecord(
        audit_id=f"{instant.strftime('%Y-%m-%d')}-{slug}",
        date=instant.isoformat(),
        trigger=settings.trigger,
        esmc_version=settings.esmc_version,
        mode=ctx.mode or settings.default_mode,
        user_prompt=ctx.user_prompt,
        execution_evidence=evidence,
        performance_metrics=ctx.performance,
    )
