"""Store locator query."""

from protean.utils.globals import current_domain

from catalogue.store.store import Store


def find_stores(city=None, zip_code=None, latitude=None, longitude=None) -> list[Store]:
    """Open stores matching the filters, nearest first when coordinates are given."""
    stores = current_domain.repository_for(Store).find_open(city=city, zip_code=zip_code)
    if latitude is not None and longitude is not None:
        stores.sort(key=lambda store: store.distance_to(latitude, longitude))
    return stores
