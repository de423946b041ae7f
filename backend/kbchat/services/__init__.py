"""Services Layer — conversation workflows that combine naming rules with storage.

Invariants:
    - Services receive the repository and logger explicitly (no globals)
    - Domain failures surface as KbChatError subclasses
"""
