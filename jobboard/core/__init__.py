"""
Core business logic modules for jobboard.

Submodules:
- matching: Candidate-job match scorer
- listing: Listing query builder, listing service and output formatting
- profile: Profile-completeness checklist and profile strength
- dashboard: Candidate dashboard statistics
- relations: Saved and applied job actions
- jobs: Job posting management
- candidates: Candidate profile management
"""
