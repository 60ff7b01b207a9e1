"""Tests for skill overlap scoring."""

import pytest

from talentmatch.matching.skills import SkillMatcher
from talentmatch.schemas.candidate import Skill


class TestSkillMatcher:
    def test_partial_match(self):
        matcher = SkillMatcher(expand_synonyms=False)

        result = matcher.score({"react", "node.js"}, ["react", "node.js", "mongodb"])

        assert result.matched == ["react", "node.js"]
        assert result.missing == ["mongodb"]
        assert result.percentage == pytest.approx(66.67, abs=0.01)

    def test_matched_and_missing_partition_job_skills(self):
        matcher = SkillMatcher(expand_synonyms=False)
        job_skills = ["python", "sql", "docker", "aws"]

        result = matcher.score(["sql", "aws", "rust"], job_skills)

        assert set(result.matched) | set(result.missing) == set(job_skills)
        assert not set(result.matched) & set(result.missing)

    def test_empty_job_skills_is_zero(self):
        matcher = SkillMatcher(expand_synonyms=False)

        result = matcher.score(["python"], [])

        assert result.percentage == 0
        assert result.matched == []
        assert result.missing == []

    def test_no_candidate_skills(self):
        matcher = SkillMatcher(expand_synonyms=False)

        result = matcher.score([], ["python", "sql"])

        assert result.percentage == 0
        assert result.missing == ["python", "sql"]

    def test_full_match(self):
        matcher = SkillMatcher(expand_synonyms=False)

        result = matcher.score(["python", "sql", "extra"], ["python", "sql"])

        assert result.percentage == 100

    def test_names_are_canonicalized(self):
        matcher = SkillMatcher(expand_synonyms=False)

        result = matcher.score(["  React "], [Skill(name="REACT")])

        assert result.matched == ["react"]

    def test_duplicate_job_skills_counted_once(self):
        matcher = SkillMatcher(expand_synonyms=False)

        result = matcher.score(["python"], ["python", "Python", "sql"])

        assert result.matched == ["python"]
        assert result.percentage == pytest.approx(50.0)

    def test_synonyms_ignored_by_default(self):
        matcher = SkillMatcher(expand_synonyms=False)
        job_skill = Skill(name="javascript", synonyms=["js", "ecmascript"])

        result = matcher.score(["js"], [job_skill])

        assert result.matched == []
        assert result.missing == ["javascript"]


class TestSkillMatcherSynonyms:
    def test_candidate_name_in_job_synonyms(self):
        matcher = SkillMatcher(expand_synonyms=True)
        job_skill = Skill(name="javascript", synonyms=["JS"])

        result = matcher.score(["js"], [job_skill])

        assert result.matched == ["javascript"]
        assert result.percentage == 100

    def test_job_name_in_candidate_synonyms(self):
        matcher = SkillMatcher(expand_synonyms=True)
        candidate_skill = Skill(name="postgres", synonyms=["postgresql"])

        result = matcher.score([candidate_skill], ["postgresql", "redis"])

        assert result.matched == ["postgresql"]
        assert result.missing == ["redis"]
