from sqlalchemy import JSON, Column, DateTime, String, Text, Uuid, func

from accessguard.db.base import Base, UUIDMixin


class AuditRecord(UUIDMixin, Base):
    """
    One gated decision and its outcome.
    Append-only: written by the audit interceptor, never updated or deleted.
    """

    __tablename__ = "audit_records"

    # Who (NULL for unauthenticated attempts). Not a foreign key so the
    # record outlives the account it refers to.
    user_id = Column(Uuid(as_uuid=True), nullable=True, index=True)

    # What
    action = Column(String(100), nullable=False, index=True)
    resource = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default="success")  # success, failed, denied

    # Context
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    details = Column(JSON, nullable=True)

    # When
    timestamp = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)

    def __repr__(self) -> str:
        return f"<AuditRecord {self.action} {self.status}>"
