"""Data models for execution contexts and audit records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

NOT_CAPTURED = "not captured"


class _Section(BaseModel):
    """Loosely-typed section: unknown keys ignored, explicit nulls treated as absent."""

    model_config = {"extra": "ignore", "populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# --- Record sections (defaults are part of the persisted schema) ---


class BootstrapRouting(_Section):
    phase: Any = NOT_CAPTURED
    mode_detected: Any = NOT_CAPTURED


class AtlasRetrieval(_Section):
    t1_hits: Any = 0
    t2_hits: Any = 0
    hydra_used: Any = False
    t3_hits: Any = 0
    total_sessions: Any = 0


class Consensus(_Section):
    confidence: Any = 0
    gaps: Any = Field(default_factory=list)


class MeshAnalysis(_Section):
    piu: Any = None
    dki: Any = None
    uip: Any = None
    pca: Any = None


class MeshIntelligence(MeshAnalysis):
    consensus: Consensus = Field(default_factory=Consensus)


class EchelonAthenaDialogue(_Section):
    triggered: Any = False
    question: Any = None
    echelon_response: Any = None


class ColonelDeployment(_Section):
    wave_1: Any = Field(default_factory=list)
    wave_2: Any = Field(default_factory=list)
    wave_3: Any = Field(default_factory=list)
    wave_4: Any = Field(default_factory=list)
    wave_5: Any = Field(default_factory=list)


class PerformanceMetrics(_Section):
    total_time: Any = NOT_CAPTURED
    token_usage: Any = NOT_CAPTURED
    atlas_time: Any = NOT_CAPTURED


class ExecutionEvidence(BaseModel):
    bootstrap_routing: BootstrapRouting = Field(default_factory=BootstrapRouting)
    atlas_retrieval: AtlasRetrieval = Field(default_factory=AtlasRetrieval)
    mesh_intelligence: MeshIntelligence = Field(default_factory=MeshIntelligence)
    echelon_athena_dialogue: EchelonAthenaDialogue = Field(default_factory=EchelonAthenaDialogue)
    colonel_deployment: ColonelDeployment = Field(default_factory=ColonelDeployment)


# --- Input ---


class ExecutionContext(_Section):
    """Caller-supplied metadata about one orchestrated run.

    Only ``userPrompt`` is required. Every section, and every member of a
    section, may be omitted.
    """

    user_prompt: str = Field(alias="userPrompt")
    mode: str | None = None
    bootstrap: BootstrapRouting = Field(default_factory=BootstrapRouting)
    atlas: AtlasRetrieval = Field(default_factory=AtlasRetrieval)
    mesh: MeshAnalysis = Field(default_factory=MeshAnalysis)
    consensus: Consensus = Field(default_factory=Consensus)
    athena: EchelonAthenaDialogue = Field(default_factory=EchelonAthenaDialogue)
    colonels: ColonelDeployment = Field(default_factory=ColonelDeployment)
    performance: PerformanceMetrics = Field(default_factory=PerformanceMetrics)

    @field_validator("user_prompt")
    @classmethod
    def prompt_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("userPrompt must not be blank")
        return v


# --- Output ---


class AuditRecord(BaseModel):
    audit_id: str
    date: str
    trigger: str
    esmc_version: str
    mode: str
    user_prompt: str
    execution_evidence: ExecutionEvidence = Field(default_factory=ExecutionEvidence)
    performance_metrics: PerformanceMetrics = Field(default_factory=PerformanceMetrics)


class CaptureResult(BaseModel):
    success: bool
    filename: str | None = None
    filepath: str | None = None
    audit_id: str | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)
