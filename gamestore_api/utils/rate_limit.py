from time import monotonic
from threading import RLock
from fastapi import Request, HTTPException

MAX_FAILS = 3
WINDOW = 30
BLOCK = 60


class LoginThrottle:
    """
    Failed-login tracker keyed by (client ip, username).
    MAX_FAILS failures inside WINDOW seconds block the pair for BLOCK seconds.
    One instance lives on app.state.
    """

    def __init__(self, max_fails: int = MAX_FAILS, window: float = WINDOW, block: float = BLOCK):
        self.max_fails = max_fails
        self.window = window
        self.block = block
        self._state = {}
        self._lock = RLock()

    def check(self, ip: str, user: str):
        now = monotonic()
        key = (ip, user.lower())
        with self._lock:
            rec = self._state.get(key, {"fails": [], "blocked": 0})
            if rec["blocked"] > now:
                raise HTTPException(
                    status_code=429,
                    detail="Too many failed login attempts. Try again later.",
                    headers={"Retry-After": str(int(rec["blocked"] - now) + 1)}
                )
            rec["fails"] = [t for t in rec["fails"] if t >= now - self.window]
            self._state[key] = rec

    def note_fail(self, ip: str, user: str):
        now = monotonic()
        key = (ip, user.lower())
        with self._lock:
            rec = self._state.setdefault(key, {"fails": [], "blocked": 0})
            rec["fails"] = [t for t in rec["fails"] if t >= now - self.window] + [now]
            if len(rec["fails"]) >= self.max_fails:
                rec["blocked"] = now + self.block

    def note_success(self, ip: str, user: str):
        key = (ip, user.lower())
        with self._lock:
            self._state.pop(key, None)


def client_ip(request: Request) -> str:
    return (request.client.host if request.client else "") or ""
