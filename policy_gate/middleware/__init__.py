"""HTTP middleware: request ID.

Applied in main app. Import and use from policy_gate.main.
"""

from policy_gate.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
