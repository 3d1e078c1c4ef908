import pytest
from pydantic import ValidationError

from src.config import environment_variables as environment_variables_module
from src.config.environment_variables import EnvironmentVariables, EnvVarKeys


@pytest.fixture
def fresh_environment(monkeypatch):
    """Drop the cached settings and keep .env files out of the way"""
    monkeypatch.setattr(
        environment_variables_module, "refreshed_environment_variables", None
    )
    monkeypatch.delenv(EnvVarKeys.ENVIRONMENT.value, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestEnvironmentVariables:
    def test_page_size_defaults(self, fresh_environment):
        fresh_environment.delenv(EnvVarKeys.ORDERS_PAGE_SIZE.value, raising=False)
        fresh_environment.delenv(EnvVarKeys.PRODUCTS_PAGE_SIZE.value, raising=False)

        settings = EnvironmentVariables.refresh(force_refresh=True)

        assert settings.ORDERS_PAGE_SIZE == 30
        assert settings.PRODUCTS_PAGE_SIZE == 29
        assert settings.MONGODB_DATABASE_NAME == "catalog"

    def test_page_sizes_read_from_environment(self, fresh_environment):
        fresh_environment.setenv(EnvVarKeys.ORDERS_PAGE_SIZE.value, "5")
        fresh_environment.setenv(EnvVarKeys.PRODUCTS_PAGE_SIZE.value, "7")

        settings = EnvironmentVariables.refresh(force_refresh=True)

        assert settings.ORDERS_PAGE_SIZE == 5
        assert settings.PRODUCTS_PAGE_SIZE == 7

    def test_refresh_is_cached(self, fresh_environment):
        first = EnvironmentVariables.refresh()
        fresh_environment.setenv(EnvVarKeys.ORDERS_PAGE_SIZE.value, "3")

        assert EnvironmentVariables.refresh() is first

    @pytest.mark.parametrize("page_size", ["0", "-1"])
    def test_page_size_below_one_is_rejected(self, fresh_environment, page_size):
        fresh_environment.setenv(EnvVarKeys.ORDERS_PAGE_SIZE.value, page_size)

        with pytest.raises(ValidationError):
            EnvironmentVariables.refresh(force_refresh=True)

    def test_zero_products_page_size_is_rejected(self):
        with pytest.raises(ValidationError):
            EnvironmentVariables(PRODUCTS_PAGE_SIZE=0)
