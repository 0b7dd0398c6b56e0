"""
Recommendation engine: ranks the mission archetypes against an
environment snapshot with difficulty ratings and "why now" explanations.

Modules
-------
scorer   : ArchetypeScoring table + compute_suitability() +
           compute_difficulty() + generate_why_now() - pure functions.
ranker   : Recommendation dataclass + generate_recommendations().
reporter : ASCII panels for the CLI + write_recommendations_json().
"""
