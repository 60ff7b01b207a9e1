"""TalentMatch - candidate-to-job matching and recommendation engine."""
