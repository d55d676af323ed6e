"""Store registration — command and handler."""

import json

from protean import handle
from protean.fields import Boolean, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.store.store import Store


@catalogue.command(part_of="Store")
class AddStore:
    name: String(required=True, max_length=255)
    address: Text(required=True)  # JSON: {street, city, state, zip_code, landmark?}
    location: Text(required=True)  # JSON: {latitude, longitude}
    phone: String(required=True, max_length=30)
    email: String(max_length=255)
    timing: Text(required=True)  # JSON: {open, close}
    days_open: Text()  # JSON: list of weekday names
    is_open: Boolean(default=True)
    services: Text()  # JSON: {dine_in, takeaway, delivery}


def _load(value):
    return json.loads(value) if isinstance(value, str) else value


@catalogue.command_handler(part_of=Store)
class AddStoreHandler:
    @handle(AddStore)
    def add_store(self, command):
        store = Store.create(
            name=command.name,
            address=_load(command.address),
            location=_load(command.location),
            phone=command.phone,
            email=command.email,
            timing=_load(command.timing),
            days_open=_load(command.days_open),
            is_open=command.is_open if command.is_open is not None else True,
            services=_load(command.services),
        )
        current_domain.repository_for(Store).add(store)
        return str(store.id)
