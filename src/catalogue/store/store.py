"""Store aggregate — a restaurant location customers can visit or order from."""

import json
import math
import re
from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String, Text, ValueObject

from catalogue.domain import catalogue

_HH_MM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@catalogue.value_object(part_of="Store")
class StoreAddress:
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    zip_code: String(required=True, max_length=20)
    landmark: String(max_length=255)


@catalogue.value_object(part_of="Store")
class GeoLocation:
    latitude: Float(required=True, min_value=-90.0, max_value=90.0)
    longitude: Float(required=True, min_value=-180.0, max_value=180.0)


@catalogue.value_object(part_of="Store")
class OpeningHours:
    """Daily opening and closing times in 24-hour HH:MM."""

    open: String(required=True, max_length=5)
    close: String(required=True, max_length=5)

    @invariant.post
    def times_must_be_hh_mm(self):
        for label, value in (("open", self.open), ("close", self.close)):
            if value and not _HH_MM.match(value):
                raise ValidationError({label: [f"Time must be HH:MM, got '{value}'"]})


@catalogue.value_object(part_of="Store")
class StoreServices:
    dine_in: Boolean(default=True)
    takeaway: Boolean(default=True)
    delivery: Boolean(default=True)


@catalogue.aggregate
class Store:
    name: String(required=True, max_length=255)
    address: ValueObject(StoreAddress, required=True)
    location: ValueObject(GeoLocation, required=True)
    phone: String(required=True, max_length=30)
    email: String(max_length=255)
    timing: ValueObject(OpeningHours, required=True)
    days_open: Text()  # JSON array of weekday names
    is_open: Boolean(default=True)
    services: ValueObject(StoreServices)
    created_at: DateTime(default=datetime.now)

    @classmethod
    def create(
        cls,
        name,
        address,
        location,
        phone,
        timing,
        email=None,
        days_open=None,
        is_open=True,
        services=None,
    ):
        from catalogue.store.events import StoreAdded

        store = cls(
            name=name,
            address=StoreAddress(**address),
            location=GeoLocation(**location),
            phone=phone,
            email=email,
            timing=OpeningHours(**timing),
            days_open=json.dumps(days_open or []),
            is_open=is_open,
            services=StoreServices(**(services or {})),
            created_at=datetime.now(),
        )
        store.raise_(
            StoreAdded(
                store_id=store.id,
                name=name,
                city=store.address.city,
                zip_code=store.address.zip_code,
            )
        )
        return store

    def distance_to(self, latitude, longitude) -> float:
        """Planar distance in degrees; only meaningful for ranking nearby stores."""
        return math.hypot(self.location.latitude - latitude, self.location.longitude - longitude)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "address": {
                "street": self.address.street,
                "city": self.address.city,
                "state": self.address.state,
                "zip_code": self.address.zip_code,
                "landmark": self.address.landmark,
            },
            "location": {"latitude": self.location.latitude, "longitude": self.location.longitude},
            "phone": self.phone,
            "email": self.email,
            "timing": {"open": self.timing.open, "close": self.timing.close},
            "days_open": json.loads(self.days_open) if self.days_open else [],
            "is_open": self.is_open,
            "services": {
                "dine_in": self.services.dine_in if self.services else True,
                "takeaway": self.services.takeaway if self.services else True,
                "delivery": self.services.delivery if self.services else True,
            },
        }


@catalogue.repository(part_of=Store)
class StoreRepository:
    def find_open(self, city=None, zip_code=None) -> list[Store]:
        """Open stores, matching city as a case-insensitive substring and zip exactly."""
        stores = self._dao.query.filter(is_open=True).all().items
        if city:
            needle = city.casefold()
            stores = [store for store in stores if needle in store.address.city.casefold()]
        if zip_code:
            stores = [store for store in stores if store.address.zip_code == zip_code]
        return stores

    def find_by_name(self, name) -> Store | None:
        matches = self._dao.query.filter(name=name).all().items
        return matches[0] if matches else None
