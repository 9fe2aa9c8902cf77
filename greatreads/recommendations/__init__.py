"""
Recommendation engine: scores a book catalog against a reader's preference
profile and returns ranked recommendations with human-readable signals.

Modules
-------
signals   : RuleOutcome dataclass + one evaluator per rule + SIGNAL_RULES
            (ordered); pure functions, no I/O.
engine    : BookScore dataclass + score_book() + generate_recommendations().
discovery : genre_blend() + explain_signals().
reporter  : write_recommendation_csv() + write_recommendation_json(); file output.
"""
