"""Location scoring."""

from talentmatch.schemas.match import LocationMatch

SAME_LOCATION_SCORE = 100
DIFFERENT_LOCATION_SCORE = 50


def _fold(location: str | None) -> str | None:
    return location.lower() if location is not None else None


class LocationMatcher:
    def score(self, candidate_location: str | None, job_location: str | None) -> LocationMatch:
        """Score location fit.

        The score compares case-insensitively while the reason compares the
        raw strings, so "Berlin" vs "berlin" scores 100 with reason
        "Different location". Two missing locations count as the same.
        """
        same = _fold(candidate_location) == _fold(job_location)
        reason = "Same location" if candidate_location == job_location else "Different location"
        return LocationMatch(
            score=SAME_LOCATION_SCORE if same else DIFFERENT_LOCATION_SCORE,
            reason=reason,
        )
