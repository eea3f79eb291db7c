from enum import Enum

from sqlalchemy import Column, String, BigInteger, Integer, DateTime, ForeignKey, UniqueConstraint

from gateway_api.registry_api import db
from gateway_api.registry_api.models.Gateway import utcnow


class DeviceStatus(Enum):
    ONLINE = 'online'
    OFFLINE = 'offline'


class Device(db.Model):
    __tablename__ = 'device'
    __table_args__ = (
        UniqueConstraint('gateway_id', 'vendor', name='uq_device_gateway_vendor'),
    )
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    gateway_id = Column(BigInteger, ForeignKey("gateway.id"), nullable=False, index=True)
    uid = Column(BigInteger, nullable=False)
    vendor = Column(String(120), nullable=False)
    status = Column(String(7), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def to_json(self, gateway=None):
        """
        The gateway is rendered as its id unless a resolved value (an id or
        a full gateway dict) is given.
        """
        return {
            '_id': self.id,
            'gateway': self.gateway_id if gateway is None else gateway,
            'uid': self.uid,
            'vendor': self.vendor,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
