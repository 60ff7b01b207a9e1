"""Tests for pairwise TF-IDF text similarity."""

import math

import pytest

from talentmatch.matching.text_similarity import (
    STOP_WORDS,
    PairwiseTfidfScorer,
    build_candidate_text,
    build_job_text,
    tokenize,
)
from tests.test_utils import make_test_candidate, make_test_job

# idf of a term present in both documents of a two-document corpus
SHARED_IDF = 1 + math.log(2 / 3)


class TestTokenize:
    def test_lowercases_and_splits_on_punctuation(self):
        assert tokenize("Node.js, React; PYTHON") == ["node", "js", "react", "python"]

    def test_non_ascii_letters_split_words(self):
        assert tokenize("Café Zürich") == ["caf", "z", "rich"]

    def test_underscore_is_part_of_word(self):
        assert tokenize("snake_case") == ["snake_case"]

    def test_empty_text(self):
        assert tokenize("") == []
        assert tokenize("  ...  ") == []


class TestBuildTexts:
    def test_candidate_text_includes_all_parts(self):
        candidate = make_test_candidate(
            skills=["python"],
            bio="Backend developer",
            experience=[("Engineer", "Built APIs")],
        )

        text = build_candidate_text(candidate)

        assert text == "Backend developer python Engineer Built APIs"

    def test_candidate_text_without_bio(self):
        candidate = make_test_candidate(skills=["python"])

        assert build_candidate_text(candidate).split() == ["python"]

    def test_job_text_includes_all_parts(self):
        job = make_test_job(
            "1",
            title="Data Engineer",
            description="Pipelines",
            skills=["sql", "airflow"],
            responsibilities=["Own ETL"],
            qualifications=["Degree"],
        )

        text = build_job_text(job)

        assert text == "Data Engineer Pipelines sql airflow Own ETL Degree"


class TestPairwiseTfidfScorer:
    def test_single_shared_term(self):
        scorer = PairwiseTfidfScorer()

        result = scorer.score("python developer", "python engineer")

        assert result == pytest.approx(SHARED_IDF * 10)

    def test_no_overlap_returns_zero(self):
        scorer = PairwiseTfidfScorer()

        assert scorer.score("python developer", "graphic designer") == 0.0

    def test_empty_texts_return_zero(self):
        scorer = PairwiseTfidfScorer()

        assert scorer.score("", "python") == 0.0
        assert scorer.score("python", "") == 0.0

    def test_stop_words_only_returns_zero(self):
        scorer = PairwiseTfidfScorer()

        assert scorer.score("the and of", "the and of") == 0.0

    def test_repeated_candidate_tokens_counted(self):
        scorer = PairwiseTfidfScorer()

        once = scorer.score("python", "python")
        twice = scorer.score("python python", "python")

        assert twice == pytest.approx(2 * once)

    def test_asymmetric(self):
        scorer = PairwiseTfidfScorer()

        forward = scorer.score("python python", "python")
        backward = scorer.score("python", "python python")

        assert forward != pytest.approx(backward)

    def test_case_insensitive(self):
        scorer = PairwiseTfidfScorer()

        assert scorer.score("PYTHON", "python") == pytest.approx(scorer.score("python", "python"))

    def test_capped_at_100(self):
        scorer = PairwiseTfidfScorer()
        text = "python " * 30

        assert scorer.score(text, text) == 100.0

    def test_custom_scale(self):
        scorer = PairwiseTfidfScorer(scale=1)

        assert scorer.score("python", "python") == pytest.approx(SHARED_IDF)

    def test_score_within_bounds(self):
        scorer = PairwiseTfidfScorer()
        pairs = [
            ("react node.js developer", "react developer with node.js"),
            ("a", "b"),
            ("kubernetes " * 5 + "golang", "golang kubernetes terraform"),
        ]

        for candidate_text, job_text in pairs:
            assert 0.0 <= scorer.score(candidate_text, job_text) <= 100.0


class TestStopWords:
    @pytest.mark.parametrize(
        "text",
        ["full stack developer", "front end system", "back end computer"],
    )
    def test_common_job_words_are_counted(self, text):
        scorer = PairwiseTfidfScorer()

        assert scorer.score(text, text) == pytest.approx(3 * SHARED_IDF * 10)

    def test_single_letters_and_digits_are_not_counted(self):
        scorer = PairwiseTfidfScorer()

        assert scorer.score("c 3 years", "c 3 years") == pytest.approx(SHARED_IDF * 10)

    def test_function_words_not_counted(self):
        assert {"the", "with", "and"} <= STOP_WORDS
        assert not {"full", "front", "system", "years"} & STOP_WORDS
