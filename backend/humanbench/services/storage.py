from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from humanbench import db
from humanbench.models import KeyValue
from humanbench.services.benchmarks.scores import PersistenceUnavailable


class SQLAlchemyBackend:
    """Key-value backend stored in the ``key_value`` table.

    Each call pushes its own app context so it also works from timer
    callbacks running outside a request.
    """

    def __init__(self, app):
        self.app = app

    def get(self, key: str) -> Optional[str]:
        with self.app.app_context():
            try:
                row = db.session.get(KeyValue, key)
                return row.value if row else None
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise PersistenceUnavailable(str(exc)) from exc

    def set(self, key: str, value: str) -> None:
        with self.app.app_context():
            try:
                row = db.session.get(KeyValue, key)
                if row is None:
                    row = KeyValue(key=key, value=value)
                else:
                    row.value = value
                db.session.add(row)
                db.session.commit()
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise PersistenceUnavailable(str(exc)) from exc

    def delete(self, key: str) -> None:
        with self.app.app_context():
            try:
                KeyValue.query.filter_by(key=key).delete()
                db.session.commit()
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise PersistenceUnavailable(str(exc)) from exc
