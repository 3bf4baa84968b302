import math, logging, requests
from datetime import datetime, timezone
from typing import Dict, List, Optional

from arya.config.settings import Settings
from arya.models.mobility import EVCharger

logger = logging.getLogger(__name__)

PREMIUM_OPERATORS = ['tesla', 'porsche', 'ionity', 'fastned']
BASE_PRICES = {'ultra-fast': 2.5, 'fast': 1.2, 'slow': 0.8}
COMMENT_AMENITIES = [
    ('wifi', 'WiFi'),
    ('coffee', 'Coffee Shop'),
    ('restroom', 'Restroom'),
    ('shade', 'Shaded Parking'),
]

def _days_since(value: Optional[str], now: datetime) -> float:
    if not value:
        return math.inf
    try:
        stamp = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return math.inf
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return (now - stamp).total_seconds() / 86400

class OCMConverter:
    """Map raw Open Charge Map POI records onto EVCharger"""

    @staticmethod
    def max_power_kw(connections: List[Dict]) -> float:
        if not connections:
            return 7
        return max((c.get('PowerKW') or 7) for c in connections)

    @staticmethod
    def charger_type(connections: List[Dict]) -> str:
        if not connections:
            return 'slow'
        max_power = max((c.get('PowerKW') or 0) for c in connections)
        if max_power >= 100:
            return 'ultra-fast'
        if max_power >= 22:
            return 'fast'
        return 'slow'

    @staticmethod
    def total_points(record: Dict) -> int:
        return record.get('NumberOfPoints') or len(record.get('Connections') or []) or 1

    @staticmethod
    def available_sockets(record: Dict) -> int:
        # OCM has no live availability, assume 70% of points are free on operational sites
        status = record.get('StatusType') or {}
        is_operational = status.get('IsOperational') is not False
        return math.ceil(OCMConverter.total_points(record) * 0.7) if is_operational else 0

    @staticmethod
    def price_estimate(record: Dict) -> float:
        base_price = BASE_PRICES[OCMConverter.charger_type(record.get('Connections'))]
        operator = ((record.get('OperatorInfo') or {}).get('Title') or '').lower()
        multiplier = 1.3 if any(p in operator for p in PREMIUM_OPERATORS) else 1.0
        return round(base_price * multiplier, 2)

    @staticmethod
    def amenities(record: Dict) -> List[str]:
        found = []
        if (record.get('UsageType') or {}).get('IsPayAtLocation'):
            found.append('Pay at Location')
        comments = (record.get('GeneralComments') or '').lower()
        for keyword, label in COMMENT_AMENITIES:
            if keyword in comments:
                found.append(label)
        return found

    @staticmethod
    def reliability(record: Dict, now: datetime) -> int:
        score = 70

        verified_days = _days_since(record.get('DateLastVerified'), now)
        if verified_days < 30:
            score += 15
        elif verified_days < 90:
            score += 10

        if (record.get('StatusType') or {}).get('IsOperational'):
            score += 10

        if _days_since(record.get('DateLastStatusUpdate'), now) < 7:
            score += 5

        return min(score, 95)

    @classmethod
    def to_charger(cls, record: Dict, now: Optional[datetime] = None) -> EVCharger:
        now = now or datetime.now(timezone.utc)
        address = record.get('AddressInfo') or {}
        connections = record.get('Connections') or []

        return EVCharger(
            id=f"ocm-{record.get('ID')}",
            latitude=address['Latitude'],
            longitude=address['Longitude'],
            address=address.get('AddressLine1') or address.get('Title') or 'Unknown address',
            district=address.get('Town') or address.get('StateOrProvince') or 'Dubai',
            type=cls.charger_type(connections),
            total_sockets=cls.total_points(record),
            available_sockets=cls.available_sockets(record),
            power_output=cls.max_power_kw(connections),
            price=cls.price_estimate(record),
            operator=(record.get('OperatorInfo') or {}).get('Title') or 'Unknown Operator',
            amenities=cls.amenities(record),
            reliability=cls.reliability(record, now),
        )

class OpenChargeMapService:

    def __init__(self, settings: Settings):
        self.base_url = settings.OCM_BASE_URL
        self.api_key = settings.OCM_API_KEY
        self.timeout = settings.REQUEST_TIMEOUT_SECONDS

    def _params(self, **extra) -> Dict:
        params = dict(extra)
        if self.api_key:
            params['key'] = self.api_key
        return params

    def fetch_chargers(self, latitude: float, longitude: float, radius_km: float = 10) -> List[EVCharger]:
        """
        Fetch chargers around a point in the UAE.
        Returns an empty list on any network or format error.
        """
        try:
            response = requests.get(
                f"{self.base_url}/poi",
                params=self._params(
                    latitude=latitude,
                    longitude=longitude,
                    distance=radius_km,
                    distanceunit='KM',
                    countrycode='AE',
                    maxresults=50,
                    verbose='false',
                    includecomments='true',
                ),
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()

            if not isinstance(data, list):
                logger.error(f"OpenChargeMapService: unexpected response format: {type(data).__name__}")
                return []

            valid = [
                r for r in data
                if (r.get('AddressInfo') or {}).get('Latitude') and (r.get('AddressInfo') or {}).get('Longitude')
            ]
            chargers = [OCMConverter.to_charger(r) for r in valid]
            logger.info(f"OpenChargeMapService: {len(chargers)} of {len(data)} chargers usable within {radius_km}km")
            return chargers

        except Exception as e:
            logger.error(f"OpenChargeMapService: error fetching chargers: {e}")
            return []

    def get_charger_details(self, charger_id: str) -> Optional[EVCharger]:
        ocm_id = charger_id.replace('ocm-', '')
        try:
            response = requests.get(
                f"{self.base_url}/poi",
                params=self._params(chargepointid=ocm_id, verbose='true'),
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()

            if not isinstance(data, list) or not data:
                return None
            return OCMConverter.to_charger(data[0])

        except Exception as e:
            logger.error(f"OpenChargeMapService: error fetching charger {charger_id}: {e}")
            return None
