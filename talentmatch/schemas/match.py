from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SkillsMatch(BaseModel):
    """Overlap between candidate skills and the skills a job requires."""

    model_config = ConfigDict(frozen=True)

    percentage: float = Field(description="Share of required skills the candidate has (0-100)")
    matched: list[str] = Field(default_factory=list, description="Required skills the candidate has")
    missing: list[str] = Field(default_factory=list, description="Required skills the candidate lacks")


class ExperienceMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float = Field(description="Experience fit score (0-100)")
    reason: str = Field(description="Human-readable explanation of the score")


class LocationMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float = Field(description="Location fit score (0-100)")
    reason: str = Field(description="Human-readable explanation of the score")


class MatchDetails(BaseModel):
    """Per-factor breakdown behind a match score."""

    model_config = ConfigDict(frozen=True)

    skills_match: SkillsMatch
    experience_match: ExperienceMatch
    location_match: LocationMatch


class MatchResult(BaseModel):
    """Result of scoring one candidate against one job."""

    model_config = ConfigDict(frozen=True)

    match_score: int = Field(ge=0, le=100, description="Overall match score (0-100)")
    match_details: MatchDetails = Field(description="Per-factor breakdown")
    reasoning: str = Field(description="Generated summary of the match")


class Recommendation(BaseModel):
    """A persisted match between a candidate and a job."""

    id: int | None = Field(default=None, description="Storage identifier")
    candidate_id: str = Field(description="Candidate the job is recommended to")
    job_id: str = Field(description="Recommended job")
    match_score: int = Field(ge=0, le=100, description="Overall match score (0-100)")
    match_details: MatchDetails = Field(description="Per-factor breakdown")
    reasoning: str = Field(description="Generated summary of the match")
    viewed: bool = Field(default=False, description="Whether the candidate has opened it")
    viewed_at: datetime | None = Field(default=None, description="When it was first viewed")
    created_at: datetime | None = Field(default=None, description="When it was generated")
    expires_at: datetime | None = Field(default=None, description="When it stops being listed")

    @classmethod
    def from_match(cls, candidate_id: str, job_id: str, result: MatchResult) -> "Recommendation":
        return cls(
            candidate_id=candidate_id,
            job_id=job_id,
            match_score=result.match_score,
            match_details=result.match_details,
            reasoning=result.reasoning,
        )
