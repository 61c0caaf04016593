"""In-memory implementation of SessionRepository for testing."""

from domain.model.session import Session


class FakeSessionRepository:
    def __init__(self):
        self.store: dict[str, Session] = {}

    def save(self, session: Session) -> None:
        self.store[session.token] = session

    def get(self, token: str) -> Session | None:
        return self.store.get(token)

    def delete(self, token: str) -> bool:
        return self.store.pop(token, None) is not None
