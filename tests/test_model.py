"""
Tests for populating pydantic models from the environment.
"""

from typing import Optional

import pytest
from pydantic import BaseModel, Field, ValidationError

from envkit.errors import RequiredEnvError
from envkit.model import require_model, unmarshal


class DatabaseSettings(BaseModel):
    """Example settings model"""

    host: str = "localhost"
    port: int = 5432
    debug: bool = False
    replicas: list[str] = Field(default_factory=list)
    password: str = Field(alias="DB_PASSWORD")
    options: dict[str, int] = Field(default_factory=dict)
    timeout: Optional[float] = None


class TestUnmarshal:
    """Test unmarshal()"""

    def test_defaults_apply_for_unset_variables(self, env):
        env.set("DB_PASSWORD", "secret")

        settings = unmarshal(DatabaseSettings, env)

        assert settings.host == "localhost"
        assert settings.port == 5432
        assert settings.password == "secret"
        assert settings.replicas == []

    def test_values_are_coerced(self, env):
        env.set("HOST", "db.internal")
        env.set("PORT", "6543")
        env.set("DEBUG", "true")
        env.set("TIMEOUT", "2.5")
        env.set("DB_PASSWORD", "secret")

        settings = unmarshal(DatabaseSettings, env)

        assert settings.host == "db.internal"
        assert settings.port == 6543
        assert settings.debug is True
        assert settings.timeout == 2.5

    def test_comma_list(self, env):
        env.set("REPLICAS", "a,b,c")
        env.set("DB_PASSWORD", "secret")

        assert unmarshal(DatabaseSettings, env).replicas == ["a", "b", "c"]

    def test_json_values(self, env):
        env.set("REPLICAS", '["x", "y"]')
        env.set("OPTIONS", '{"pool": 5}')
        env.set("DB_PASSWORD", "secret")

        settings = unmarshal(DatabaseSettings, env)

        assert settings.replicas == ["x", "y"]
        assert settings.options == {"pool": 5}

    def test_missing_required_field(self, env):
        with pytest.raises(ValidationError):
            unmarshal(DatabaseSettings, env)

    def test_reads_process_environment(self, monkeypatch):
        for name in ("HOST", "DEBUG", "REPLICAS", "OPTIONS", "TIMEOUT"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("DB_PASSWORD", "from-os")
        monkeypatch.setenv("PORT", "1")

        settings = unmarshal(DatabaseSettings)

        assert settings.password == "from-os"
        assert settings.port == 1


class TestRequireModel:
    """Test require_model()"""

    def test_success(self, env):
        env.set("DB_PASSWORD", "secret")
        assert require_model(DatabaseSettings, env).password == "secret"

    def test_missing_names_variable(self, env):
        with pytest.raises(RequiredEnvError) as exc_info:
            require_model(DatabaseSettings, env)

        assert exc_info.value.key == "DB_PASSWORD"
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_invalid_names_variable(self, env):
        env.set("DB_PASSWORD", "secret")
        env.set("PORT", "not-a-port")

        with pytest.raises(RequiredEnvError) as exc_info:
            require_model(DatabaseSettings, env)

        assert exc_info.value.key == "PORT"


class Endpoint(BaseModel):
    host: str
    port: int


class ServiceSettings(BaseModel):
    """Settings with structured, optional and aliased fields"""

    payload: Optional[str] = None
    banner: str = ""
    endpoint: Optional[Endpoint] = None
    limits: Optional[dict[str, int]] = None
    url: str = Field(default="http://localhost", validation_alias="SERVICE_URL")


class TestFieldDecoding:
    """Test which fields accept JSON values"""

    def test_optional_string_keeps_json_text(self, env):
        env.set("PAYLOAD", '{"a":1}')
        env.set("BANNER", "[release]")

        settings = unmarshal(ServiceSettings, env)

        assert settings.payload == '{"a":1}'
        assert settings.banner == "[release]"

    def test_optional_model_and_mapping_decode_json(self, env):
        env.set("ENDPOINT", '{"host":"db","port":5432}')
        env.set("LIMITS", '{"rps":10}')

        settings = unmarshal(ServiceSettings, env)

        assert settings.endpoint == Endpoint(host="db", port=5432)
        assert settings.limits == {"rps": 10}


class TestValidationAlias:
    """Test fields named by validation_alias"""

    def test_reads_validation_alias(self, env):
        env.set("SERVICE_URL", "https://api.internal")
        env.set("URL", "ignored")

        assert unmarshal(ServiceSettings, env).url == "https://api.internal"

    def test_default_when_alias_unset(self, env):
        env.set("URL", "ignored")
        assert unmarshal(ServiceSettings, env).url == "http://localhost"

    def test_require_model_names_validation_alias(self, env):
        class Required(BaseModel):
            url: str = Field(validation_alias="SERVICE_URL")

        with pytest.raises(RequiredEnvError) as exc_info:
            require_model(Required, env)

        assert exc_info.value.key == "SERVICE_URL"
