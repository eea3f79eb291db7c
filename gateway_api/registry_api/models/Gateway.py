from sqlalchemy import Column, String, BigInteger, Integer, DateTime
from datetime import datetime, timezone

from gateway_api.registry_api import db


def utcnow():
    return datetime.now(timezone.utc)


class Gateway(db.Model):
    __tablename__ = 'gateway'
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    serial_number = Column(String(32), nullable=False)
    name = Column(String(120), nullable=False)
    ipv4 = Column(String(15), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def to_json(self, devices=None):
        result = {
            '_id': self.id,
            'serialNumber': self.serial_number,
            'name': self.name,
            'ipv4': self.ipv4,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
        if devices is not None:
            result['devices'] = [device.to_json() for device in devices]
        return result
