"""Secret Santa Organizer — gift-exchange events, constrained pairing draws, private reveals.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
