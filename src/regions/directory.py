"""Static province → city → district lookup used by address forms.

The tree is bundled as JSON (GB/T 2260 codes) and never changes at
runtime. Unknown codes yield empty lists rather than errors.
"""

import json
from functools import lru_cache
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_REGIONS_FILE = Path(__file__).parent / "data" / "regions.json"


def _summary(node):
    return {"code": node["code"], "name": node["name"]}


class RegionDirectory:
    """Read-only view over a nested list of `{code, name, children}` nodes."""

    def __init__(self, tree):
        self._provinces = {node["code"]: node for node in tree}

    @classmethod
    def from_file(cls, path=DEFAULT_REGIONS_FILE):
        with open(path, encoding="utf-8") as fh:
            tree = json.load(fh)
        logger.debug("regions_loaded", path=str(path), provinces=len(tree))
        return cls(tree)

    def _province(self, province_code):
        return self._provinces.get(province_code)

    def _city(self, province_code, city_code):
        province = self._province(province_code)
        if province is None:
            return None
        return next((c for c in province.get("children", []) if c["code"] == city_code), None)

    def provinces(self):
        return [_summary(p) for p in self._provinces.values()]

    def cities(self, province_code):
        province = self._province(province_code)
        if province is None:
            return []
        return [_summary(c) for c in province.get("children", [])]

    def districts(self, province_code, city_code):
        city = self._city(province_code, city_code)
        if city is None:
            return []
        return [_summary(d) for d in city.get("children", [])]

    def resolve(self, province_code, city_code=None, district_code=None):
        """Map codes onto names, e.g. for filling an address form.

        Returns a dict with `province`, `city` and `district` names; a level
        whose code is missing or unknown is None.
        """
        names = {"province": None, "city": None, "district": None}

        province = self._province(province_code)
        if province is None:
            return names
        names["province"] = province["name"]

        city = self._city(province_code, city_code) if city_code else None
        if city is None:
            return names
        names["city"] = city["name"]

        if district_code:
            district = next((d for d in city.get("children", []) if d["code"] == district_code), None)
            if district is not None:
                names["district"] = district["name"]
        return names


@lru_cache(maxsize=1)
def default_directory():
    return RegionDirectory.from_file()
