"""Set-overlap scoring between candidate skills and job requirements."""

from collections.abc import Iterable

from talentmatch.config import SKILL_SYNONYM_EXPANSION
from talentmatch.schemas.candidate import Skill
from talentmatch.schemas.match import SkillsMatch


def _as_skills(skills: Iterable[Skill | str]) -> list[Skill]:
    """Coerce skill names to Skill records and drop duplicates, keeping order."""
    seen: set[str] = set()
    result = []
    for skill in skills:
        if not isinstance(skill, Skill):
            skill = Skill(name=skill)
        if skill.name not in seen:
            seen.add(skill.name)
            result.append(skill)
    return result


class SkillMatcher:
    """Compares canonical skill names.

    With ``expand_synonyms`` off (the default), skills match only on exact
    canonical name. With it on, a candidate skill also covers a job skill
    that lists it as a synonym, and vice versa.
    """

    def __init__(self, expand_synonyms: bool = SKILL_SYNONYM_EXPANSION):
        self.expand_synonyms = expand_synonyms

    def _covers(self, job_skill: Skill, candidate_names: set[str], candidate_terms: set[str]) -> bool:
        if job_skill.name in candidate_terms:
            return True
        if self.expand_synonyms:
            return any(synonym in candidate_names for synonym in job_skill.synonyms)
        return False

    def score(
        self,
        candidate_skills: Iterable[Skill | str],
        job_skills: Iterable[Skill | str],
    ) -> SkillsMatch:
        """Score how many of the job's skills the candidate has.

        Args:
            candidate_skills: Skills (or skill names) on the candidate profile.
            job_skills: Skills (or skill names) the job requires.

        Returns:
            SkillsMatch with matched/missing job skills in job order and the
            matched percentage (0 when the job lists no skills).
        """
        job = _as_skills(job_skills)
        if not job:
            return SkillsMatch(percentage=0.0, matched=[], missing=[])

        candidate = _as_skills(candidate_skills)
        candidate_names = {skill.name for skill in candidate}
        candidate_terms = set(candidate_names)
        if self.expand_synonyms:
            for skill in candidate:
                candidate_terms.update(skill.synonyms)

        matched = []
        missing = []
        for skill in job:
            if self._covers(skill, candidate_names, candidate_terms):
                matched.append(skill.name)
            else:
                missing.append(skill.name)

        percentage = len(matched) / len(job) * 100
        return SkillsMatch(percentage=percentage, matched=matched, missing=missing)
