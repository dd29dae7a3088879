"""StayWise — property management backend with rule-based pricing suggestions."""
