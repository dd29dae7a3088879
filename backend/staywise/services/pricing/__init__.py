"""Pricing suggestions — rule-based nightly price adjustments.

Modules:
    config      Multipliers, windows, holiday calendar and confidence weights
    horizon     Dated candidates for the look-ahead window
    rules       Ordered adjustment rule table and its evaluation
    engine      Suggestion generation, confidence scoring and ranking
    ai_pricing  Optional LLM first attempt with strict JSON validation
    applier     Persists an accepted suggestion as a pricing rule

Pipeline:
    AIPricingStage (per property, best effort) → engine fallback
    → rank_suggestions → apply_suggestion on user acceptance
"""
