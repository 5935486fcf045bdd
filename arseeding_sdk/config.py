"""
Network configuration for the Arseeding SDK.
"""
import importlib.resources
import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_NETWORK = "mainnet"
DEFAULT_TIMEOUT = 30.0


class NetworkConfig:
    """
    Named service endpoints, loaded from the packaged ``networks.json``.

    Environment overrides:
        ARSEEDING_NETWORK: network used when none is given (default: mainnet)
        ARSEEDING_URL: bundler URL
        EVERPAY_URL: settlement service URL
        ARSEEDING_TIMEOUT: HTTP timeout in seconds
    """

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        if cls._networks_cache is None:
            resource = importlib.resources.files("arseeding_sdk").joinpath("networks.json")
            cls._networks_cache = json.loads(resource.read_text(encoding="utf-8"))
        return cls._networks_cache

    @classmethod
    def get_network(cls, name: Optional[str] = None) -> Dict[str, Any]:
        """
        Get a network configuration by name.

        Raises:
            ValueError: If the network is unknown
        """
        name = name or os.environ.get("ARSEEDING_NETWORK", DEFAULT_NETWORK)
        networks = cls.load_networks()
        if name not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Unknown network '{name}'. Available networks: {available}")
        return networks[name]

    @classmethod
    def get_arseeding_url(cls, network: Optional[str] = None) -> str:
        return os.environ.get("ARSEEDING_URL") or cls.get_network(network)["arseedingUrl"]

    @classmethod
    def get_everpay_url(cls, network: Optional[str] = None) -> str:
        return os.environ.get("EVERPAY_URL") or cls.get_network(network)["everpayUrl"]

    @classmethod
    def get_timeout(cls) -> float:
        value = os.environ.get("ARSEEDING_TIMEOUT")
        if not value:
            return DEFAULT_TIMEOUT
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Invalid ARSEEDING_TIMEOUT {value!r}, using {DEFAULT_TIMEOUT}")
            return DEFAULT_TIMEOUT
