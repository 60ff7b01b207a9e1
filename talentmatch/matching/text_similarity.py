"""Lexical similarity between a candidate profile and a job posting."""

import re
from typing import Protocol

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

from talentmatch.config import TEXT_SCORE_SCALE
from talentmatch.schemas.candidate import CandidateProfile
from talentmatch.schemas.job import JobPosting

# Word characters are ASCII letters, digits and underscore only
_TOKEN_SEPARATOR = re.compile(r"[^A-Za-z0-9_]+")

# Terms left out of term counts: common English function words, single
# letters and single digits. Words like "full", "front" or "system" count.
STOP_WORDS = frozenset([
    "about", "above", "after", "again", "all", "also", "am", "an", "and", "another",
    "any", "are", "as", "at", "be", "because", "been", "before", "being", "below",
    "between", "both", "but", "by", "came", "can", "cannot", "come", "could", "did",
    "do", "does", "doing", "during", "each", "few", "for", "from", "further", "get",
    "got", "has", "had", "he", "have", "her", "here", "him", "himself", "his", "how",
    "if", "in", "into", "is", "it", "its", "itself", "like", "make", "many", "me",
    "might", "more", "most", "much", "must", "my", "myself", "never", "now", "of", "on",
    "only", "or", "other", "our", "ours", "ourselves", "out", "over", "own",
    "said", "same", "see", "should", "since", "so", "some", "still", "such", "take", "than",
    "that", "the", "their", "theirs", "them", "themselves", "then", "there", "these", "they",
    "this", "those", "through", "to", "too", "under", "until", "up", "very", "was",
    "way", "we", "well", "were", "what", "where", "when", "which", "while",
    "who", "whom", "with", "would", "why", "you", "your", "yours", "yourself",
    "a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k", "l", "m", "n", "o", "p",
    "q", "r", "s", "t", "u", "v", "w", "x", "y", "z", "$", "1",
    "2", "3", "4", "5", "6", "7", "8", "9", "0", "_",
])

MAX_SCORE = 100.0


def tokenize(text: str) -> list[str]:
    """Lowercase text and split it into word tokens."""
    return [token for token in _TOKEN_SEPARATOR.split(text.lower()) if token]


def build_candidate_text(candidate: CandidateProfile) -> str:
    """Combine bio, skill names and work history into one document."""
    experience = " ".join(f"{entry.title} {entry.description}" for entry in candidate.experience)
    return " ".join([
        candidate.bio or "",
        " ".join(candidate.skill_names),
        experience,
    ])


def build_job_text(job: JobPosting) -> str:
    """Combine title, description, skills, responsibilities and qualifications."""
    return " ".join([
        job.title,
        job.description,
        " ".join(job.required_skill_names),
        " ".join(job.responsibilities),
        " ".join(job.qualifications),
    ])


class TextSimilarityScorer(Protocol):
    """Scores how relevant a job text is to a candidate text (0-100)."""

    def score(self, candidate_text: str, job_text: str) -> float: ...


class PairwiseTfidfScorer:
    """TF-IDF overlap computed over a corpus of just the two documents.

    Every token occurrence in the candidate text contributes the smaller of
    its TF-IDF weights in the two documents; the sum is scaled and capped at
    100. The result is neither normalized nor symmetric: repeating a shared
    term in the candidate text raises the score.

    TF is the raw term count (terms in STOP_WORDS are not counted) and IDF is
    ``1 + ln(N / (1 + df))``.
    """

    def __init__(self, scale: float = TEXT_SCORE_SCALE):
        self.scale = scale

    def term_weights(self, candidate_text: str, job_text: str) -> tuple[dict[str, int], np.ndarray]:
        """Compute TF-IDF weights for both documents.

        Returns:
            Tuple of (vocabulary mapping term to column, weight matrix of
            shape (2, n_terms) with the candidate in row 0 and the job in row 1).
        """
        vectorizer = CountVectorizer(
            tokenizer=tokenize,
            token_pattern=None,
            lowercase=False,
            stop_words=sorted(STOP_WORDS),
        )
        counts = vectorizer.fit_transform([candidate_text, job_text]).toarray()

        n_documents = counts.shape[0]
        document_frequency = (counts > 0).sum(axis=0)
        idf = 1.0 + np.log(n_documents / (1.0 + document_frequency))

        return vectorizer.vocabulary_, counts * idf

    def score(self, candidate_text: str, job_text: str) -> float:
        candidate_tokens = tokenize(candidate_text)
        if not any(token not in STOP_WORDS for token in candidate_tokens):
            return 0.0

        vocabulary, weights = self.term_weights(candidate_text, job_text)
        shared_weight = weights.min(axis=0)

        total = 0.0
        for token in candidate_tokens:
            column = vocabulary.get(token)
            if column is not None:
                total += shared_weight[column]

        return float(min(total * self.scale, MAX_SCORE))
