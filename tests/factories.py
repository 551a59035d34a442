"""
Test data factories for Quote Relay tests
"""

from typing import Any, Dict, Optional

UPSTREAM_URL = "https://upstream.test/json/last/USD-BRL"
SERVER_URL = "http://relay.test:8080/cotacao"


class UpstreamPayloadFactory:
    """Factory for AwesomeAPI responses"""

    @staticmethod
    def create(bid: Optional[str] = "5.43", pair_key: str = "USDBRL") -> Dict[str, Any]:
        pair = {
            "code": "USD",
            "codein": "BRL",
            "name": "Dólar Americano/Real Brasileiro",
            "high": "5.4521",
            "low": "5.4012",
            "ask": "5.4312",
            "timestamp": "1718740800",
            "create_date": "2024-06-18 17:00:00"
        }
        if bid is not None:
            pair["bid"] = bid
        return {pair_key: pair}
