"""Tests for the policy contract helpers and StaticPolicy."""

import pytest

from corsgate.config import CORSGateConfig
from corsgate.engine import (
    ALLOW_CREDENTIALS,
    ALLOW_HEADERS,
    ALLOW_METHODS,
    ALLOW_ORIGIN,
    EXPOSE_HEADERS,
    MAX_AGE,
    Continue,
    ShortCircuit,
    execute,
)
from corsgate.errors import PolicyConfigurationError
from corsgate.policy import POLICY_CALLBACKS, WILDCARD, CORSPolicy, implemented_callbacks
from corsgate.static_policy import StaticPolicy


class TestPolicyContract:
    """Test cases for the CORSPolicy base class."""

    def test_policy_init_is_required(self):
        class NoInit(CORSPolicy):
            pass

        with pytest.raises(TypeError):
            NoInit()

    def test_defaults(self):
        assert POLICY_CALLBACKS == {
            "allowed_origins": [],
            "allowed_methods": [],
            "allowed_headers": [],
            "exposed_headers": [],
            "max_age": None,
            "allow_credentials": False,
        }

    def test_implemented_callbacks(self, policy_factory):
        policy = policy_factory(allow_credentials=True, allowed_origins=WILDCARD)

        assert implemented_callbacks(policy) == ["allowed_origins", "allow_credentials"]

    def test_base_class_declares_no_optional_callbacks(self):
        class InitOnly(CORSPolicy):
            def policy_init(self, request):
                return None

        assert implemented_callbacks(InitOnly()) == []


class TestStaticPolicy:
    """Test cases for StaticPolicy."""

    def test_unset_settings_are_not_exposed(self):
        assert implemented_callbacks(StaticPolicy()) == []

    def test_all_settings_exposed(self):
        policy = StaticPolicy(
            allowed_origins=WILDCARD,
            allowed_methods=["GET"],
            allowed_headers=["x-custom"],
            exposed_headers=["x-id"],
            max_age=10,
            allow_credentials=False,
        )

        assert implemented_callbacks(policy) == list(POLICY_CALLBACKS)

    @pytest.mark.parametrize("origins", ["*", ["*"]])
    def test_star_becomes_wildcard(self, origins):
        policy = StaticPolicy(allowed_origins=origins)

        assert policy.allowed_origins(None, None) == (WILDCARD, None)

    def test_single_origin_string(self):
        policy = StaticPolicy(allowed_origins="https://a.example")

        assert policy.allowed_origins(None, None) == (["https://a.example"], None)

    def test_state_passes_through(self, request_factory):
        policy = StaticPolicy(allowed_methods=["GET"])
        state = policy.policy_init(request_factory("PATCH"))

        assert state == {"method": "PATCH"}
        assert policy.allowed_methods(None, state) == (["GET"], state)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"allowed_methods": ["GET POST"]},
            {"allowed_headers": ["x custom"]},
            {"exposed_headers": ["x-id,"]},
            {"max_age": -1},
        ],
    )
    def test_invalid_settings(self, kwargs):
        with pytest.raises(PolicyConfigurationError):
            StaticPolicy(**kwargs)

    def test_from_config(self):
        config = CORSGateConfig(allowed_origins=["https://a.example"], allowed_methods=["PUT"], max_age=60, allow_credentials=True)

        policy = StaticPolicy.from_config(config)

        assert policy.allowed_origins(None, None)[0] == ["https://a.example"]
        assert policy.allowed_methods(None, None)[0] == ["PUT"]
        assert policy.max_age(None, None)[0] == 60
        assert policy.allow_credentials(None, None)[0] is True

    def test_from_default_config_has_no_max_age(self):
        assert "max_age" not in implemented_callbacks(StaticPolicy.from_config(CORSGateConfig()))

    def test_negotiates_preflight(self, request_factory):
        policy = StaticPolicy(allowed_origins=["https://a.example"], allowed_methods=["PUT"], max_age=600, allow_credentials=True)
        request = request_factory(
            "OPTIONS",
            {"Origin": "https://a.example", "Access-Control-Request-Method": "PUT", "Access-Control-Request-Headers": "content-type"},
        )

        outcome = execute(request, policy)

        assert isinstance(outcome, ShortCircuit)
        assert outcome.headers[ALLOW_ORIGIN] == "https://a.example"
        assert outcome.headers[ALLOW_METHODS] == "PUT"
        assert outcome.headers[ALLOW_HEADERS] == "origin"
        assert outcome.headers[MAX_AGE] == "600"
        assert outcome.headers[ALLOW_CREDENTIALS] == "true"

    def test_rejects_unknown_origin(self, request_factory):
        outcome = execute(request_factory("GET", {"Origin": "https://evil.example"}), StaticPolicy(allowed_origins=["https://a.example"]))

        assert isinstance(outcome, Continue)
        assert outcome.headers == {}

    def test_single_method_and_header_strings(self):
        policy = StaticPolicy(allowed_methods="PUT", allowed_headers="content-type", exposed_headers="X-Custom")

        assert policy.allowed_methods(None, None) == (["PUT"], None)
        assert policy.allowed_headers(None, None) == (["content-type"], None)
        assert policy.exposed_headers(None, None) == (["X-Custom"], None)

    def test_single_string_that_is_not_a_token(self):
        with pytest.raises(PolicyConfigurationError):
            StaticPolicy(allowed_methods="GET,PUT")

    def test_negotiates_with_single_strings(self, request_factory):
        policy = StaticPolicy(allowed_origins=["https://a.example"], allowed_methods="PUT", exposed_headers="X-Custom")

        actual = execute(request_factory("GET", {"Origin": "https://a.example"}), policy)
        preflight = execute(
            request_factory("OPTIONS", {"Origin": "https://a.example", "Access-Control-Request-Method": "PUT"}),
            policy,
        )

        assert isinstance(actual, Continue)
        assert actual.headers[EXPOSE_HEADERS] == "X-Custom"
        assert isinstance(preflight, ShortCircuit)
        assert preflight.headers[ALLOW_METHODS] == "PUT"
        assert preflight.headers[ALLOW_ORIGIN] == "https://a.example"
