from rest_framework.throttling import ScopedRateThrottle, SimpleRateThrottle


class CompanyScopedRateThrottle(ScopedRateThrottle):
    """
    Per-company rate limit. Same scope mechanics as ScopedRateThrottle, but the
    bucket is the authenticated company rather than the client IP.
    """

    def get_cache_key(self, request, view):
        return self.cache_format % {"scope": self.scope, "ident": f"company-{request.auth}"}


class WebhookAuthFailureThrottle(SimpleRateThrottle):
    """
    Per-IP budget of rejected webhook secrets. Only failures are recorded;
    once the budget is spent every request from that IP gets 429 until the
    window moves on, including ones carrying a valid secret.
    """
    scope = "webhook-auth"

    def get_cache_key(self, request, view):
        return self.cache_format % {"scope": self.scope, "ident": self.get_ident(request)}

    def is_locked_out(self, request, view) -> bool:
        self.key = self.get_cache_key(request, view)
        self.history = self.cache.get(self.key, [])
        self.now = self.timer()
        while self.history and self.history[-1] <= self.now - self.duration:
            self.history.pop()
        return len(self.history) >= self.num_requests

    def record_failure(self) -> None:
        self.history.insert(0, self.now)
        self.cache.set(self.key, self.history, self.duration)
