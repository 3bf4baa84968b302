from datetime import datetime, timedelta, timezone
from unittest.mock import Mock, patch
import requests

from arya.services.openchargemap_service import OCMConverter, OpenChargeMapService
from arya.test.factories import make_settings

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

def ocm_record(**overrides):
    record = {
        "ID": 1234,
        "AddressInfo": {
            "Title": "Dubai Mall Charging",
            "AddressLine1": "Financial Centre Rd",
            "Town": "Downtown Dubai",
            "Latitude": 25.1972,
            "Longitude": 55.2796,
        },
        "OperatorInfo": {"Title": "DEWA"},
        "StatusType": {"IsOperational": True},
        "UsageType": {"IsPayAtLocation": False},
        "NumberOfPoints": 4,
        "Connections": [{"PowerKW": 22}, {"PowerKW": 7}],
        "GeneralComments": "Free wifi and a coffee place nearby",
        "DateLastVerified": (NOW - timedelta(days=10)).isoformat(),
        "DateLastStatusUpdate": (NOW - timedelta(days=2)).isoformat(),
    }
    record.update(overrides)
    return record

def json_response(payload, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return response

class TestOCMConverter:

    def test_full_record(self):
        charger = OCMConverter.to_charger(ocm_record(), now=NOW)

        assert charger.id == "ocm-1234"
        assert charger.type == "fast"
        assert charger.power_output == 22
        assert charger.total_sockets == 4
        assert charger.available_sockets == 3
        assert charger.price == 1.2
        assert charger.operator == "DEWA"
        assert charger.address == "Financial Centre Rd"
        assert charger.district == "Downtown Dubai"
        assert charger.amenities == ["WiFi", "Coffee Shop"]
        assert charger.reliability == 95

    def test_power_thresholds(self):
        assert OCMConverter.charger_type([{"PowerKW": 150}]) == "ultra-fast"
        assert OCMConverter.charger_type([{"PowerKW": 100}]) == "ultra-fast"
        assert OCMConverter.charger_type([{"PowerKW": 50}]) == "fast"
        assert OCMConverter.charger_type([{"PowerKW": 11}]) == "slow"
        assert OCMConverter.charger_type([]) == "slow"

    def test_missing_power_defaults_to_seven(self):
        assert OCMConverter.max_power_kw([]) == 7
        assert OCMConverter.max_power_kw([{"PowerKW": None}]) == 7

    def test_premium_operator_price(self):
        record = ocm_record(OperatorInfo={"Title": "Tesla Supercharger"}, Connections=[{"PowerKW": 150}])
        assert OCMConverter.price_estimate(record) == 3.25

    def test_non_operational_site_has_no_free_sockets(self):
        record = ocm_record(StatusType={"IsOperational": False})
        assert OCMConverter.available_sockets(record) == 0

    def test_points_fall_back_to_connections(self):
        record = ocm_record(NumberOfPoints=None, Connections=[{"PowerKW": 7}] * 3)
        assert OCMConverter.total_points(record) == 3
        assert OCMConverter.available_sockets(record) == 3

    def test_reliability_for_stale_record(self):
        record = ocm_record(
            StatusType={"IsOperational": None},
            DateLastVerified=(NOW - timedelta(days=60)).isoformat(),
            DateLastStatusUpdate=None,
        )
        assert OCMConverter.reliability(record, NOW) == 80

    def test_reliability_without_dates(self):
        record = ocm_record(DateLastVerified=None, DateLastStatusUpdate="not a date")
        assert OCMConverter.reliability(record, NOW) == 80

    def test_pay_at_location_amenity(self):
        record = ocm_record(UsageType={"IsPayAtLocation": True}, GeneralComments=None)
        assert OCMConverter.amenities(record) == ["Pay at Location"]

class TestOpenChargeMapService:

    @patch("arya.services.openchargemap_service.requests.get")
    def test_fetch_drops_records_without_coordinates(self, mock_get):
        mock_get.return_value = json_response([
            ocm_record(),
            ocm_record(ID=99, AddressInfo={"Title": "Nowhere"}),
        ])
        service = OpenChargeMapService(make_settings(OCM_API_KEY="ocm-key", REQUEST_TIMEOUT_SECONDS=3))

        chargers = service.fetch_chargers(25.2, 55.27, 5)

        assert [c.id for c in chargers] == ["ocm-1234"]
        params = mock_get.call_args.kwargs["params"]
        assert params["distance"] == 5
        assert params["countrycode"] == "AE"
        assert params["key"] == "ocm-key"
        assert mock_get.call_args.kwargs["timeout"] == 3

    @patch("arya.services.openchargemap_service.requests.get")
    def test_key_is_omitted_when_not_configured(self, mock_get):
        mock_get.return_value = json_response([])
        OpenChargeMapService(make_settings()).fetch_chargers(25.2, 55.27)

        assert "key" not in mock_get.call_args.kwargs["params"]

    @patch("arya.services.openchargemap_service.requests.get")
    def test_http_error_returns_empty(self, mock_get):
        mock_get.return_value = json_response({}, status_code=503)
        assert OpenChargeMapService(make_settings()).fetch_chargers(25.2, 55.27) == []

    @patch("arya.services.openchargemap_service.requests.get")
    def test_timeout_returns_empty(self, mock_get):
        mock_get.side_effect = requests.Timeout("slow")
        assert OpenChargeMapService(make_settings()).fetch_chargers(25.2, 55.27) == []

    @patch("arya.services.openchargemap_service.requests.get")
    def test_unexpected_format_returns_empty(self, mock_get):
        mock_get.return_value = json_response({"error": "bad request"})
        assert OpenChargeMapService(make_settings()).fetch_chargers(25.2, 55.27) == []

    @patch("arya.services.openchargemap_service.requests.get")
    def test_details_strip_prefix(self, mock_get):
        mock_get.return_value = json_response([ocm_record()])

        charger = OpenChargeMapService(make_settings()).get_charger_details("ocm-1234")

        assert charger.id == "ocm-1234"
        assert mock_get.call_args.kwargs["params"]["chargepointid"] == "1234"

    @patch("arya.services.openchargemap_service.requests.get")
    def test_details_not_found(self, mock_get):
        mock_get.return_value = json_response([])
        assert OpenChargeMapService(make_settings()).get_charger_details("ocm-1") is None
