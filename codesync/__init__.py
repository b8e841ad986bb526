"""CodeSync Pro: contest, activity and hackathon aggregation API."""
