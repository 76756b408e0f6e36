"""
Tests for league settings, the exception hierarchy, the injectable random
source and logging configuration.
"""

import logging

import pytest

from front_office.config import CapConstants, DraftConstants, LeagueSettings
from front_office.exceptions import (
    ConstraintError,
    ExceptionSeverity,
    FrontOfficeException,
    NotFoundError,
    RestructureLimitError,
    ValidationError,
)
from front_office.logging_config import (
    PACKAGE_LOGGER,
    LogContext,
    configure_module_logger,
    get_logger,
    log_exception,
    setup_ai_logging,
    setup_logging,
    setup_preset,
)
from front_office.random_source import RandomSource


class TestLeagueSettings:
    """Test LeagueSettings defaults, lookups and serialization."""

    def test_default_2025_values(self):
        settings = LeagueSettings.create_default_2025()

        assert settings.season == 2025
        assert settings.salary_cap == 279_200_000
        assert settings.is_offseason is True
        assert settings.max_proration_years == 5
        assert settings.min_total_value == 1_000_000
        assert settings.user_team_id == 1

    def test_cap_count_follows_season_phase(self):
        assert LeagueSettings.create_default_2025().cap_count == 51
        assert LeagueSettings.create_regular_season_2025().cap_count == 53

    def test_salary_floor_is_share_of_cap(self):
        settings = LeagueSettings()
        assert settings.salary_floor == pytest.approx(279_200_000 * 0.89, abs=1)

    @pytest.mark.parametrize("accrued,expected", [
        (0, 750_000),
        (1, 870_000),
        (2, 940_000),
        (3, 1_000_000),
        (4, 1_092_500),
        (6, 1_092_500),
        (7, 1_250_000),
        (10, 1_500_000),
        (15, 1_500_000),
    ])
    def test_minimum_salary_table(self, accrued, expected):
        assert LeagueSettings().get_minimum_salary(accrued) == expected

    def test_negative_accrued_seasons_use_rookie_minimum(self):
        assert LeagueSettings().get_minimum_salary(-2) == 750_000

    def test_round_trip_through_dict(self):
        settings = LeagueSettings(season=2026, is_offseason=False, user_team_id=7)

        data = settings.to_dict()
        assert all(isinstance(key, str) for key in data["minimum_salaries"])

        assert LeagueSettings.from_dict(data) == settings

    def test_from_empty_dict_uses_defaults(self):
        settings = LeagueSettings.from_dict({})
        assert settings.salary_cap == CapConstants.SALARY_CAP_2025
        assert settings.draft_rounds == DraftConstants.DRAFT_ROUNDS
        assert settings.minimum_salaries == CapConstants.MINIMUM_SALARIES

    def test_invalid_settings_rejected(self):
        with pytest.raises(ValueError):
            LeagueSettings(salary_cap=0)
        with pytest.raises(ValueError):
            LeagueSettings(min_contract_years=5, max_contract_years=3)
        with pytest.raises(ValueError):
            LeagueSettings(minimum_salaries={})


class TestExceptions:
    """Test the error taxonomy and its builtin base classes."""

    def test_validation_error_carries_itemized_errors(self):
        error = ValidationError("Invalid offer", errors=["too long", "too cheap"])

        assert error.errors == ["too long", "too cheap"]
        assert error.error_code == "FO_VALIDATION_001"
        assert error.context_dict["errors"] == ["too long", "too cheap"]
        assert str(error).startswith("[FO_VALIDATION_001] Invalid offer")

    def test_validation_error_defaults_errors_to_message(self):
        assert ValidationError("Amount must be positive").errors == ["Amount must be positive"]

    def test_builtin_base_classes(self):
        assert isinstance(ValidationError("x"), ValueError)
        assert isinstance(ConstraintError("x"), ValueError)
        assert isinstance(NotFoundError("x"), LookupError)
        for error in (ValidationError("x"), ConstraintError("x"), NotFoundError("x")):
            assert isinstance(error, FrontOfficeException)

    def test_restructure_limit_error_is_both_kinds(self):
        error = RestructureLimitError("Must leave minimum base salary", context_dict={"year": 2026})

        assert isinstance(error, ConstraintError)
        assert isinstance(error, ValidationError)
        assert error.errors == ["Must leave minimum base salary"]
        assert error.error_code == "FO_CONSTRAINT_004"
        assert error.context_dict == {"year": 2026}

    def test_severity_and_codes(self):
        assert ConstraintError("x").severity == ExceptionSeverity.WARNING
        assert ConstraintError("x").error_code == "FO_CONSTRAINT_003"
        assert NotFoundError("x").error_code == "FO_NOT_FOUND_002"

    def test_to_dict(self):
        error = NotFoundError("No data for year 2030", context_dict={"year": 2030})
        data = error.to_dict()

        assert data["error_code"] == "FO_NOT_FOUND_002"
        assert data["message"] == "No data for year 2030"
        assert data["severity"] == "error"
        assert data["context"] == {"year": 2030}
        assert "timestamp" in data

    def test_context_in_message(self):
        error = ConstraintError("Too much", context_dict={"contract_id": 4})
        assert "contract_id=4" in str(error)


class TestRandomSource:
    """Test the injectable random source."""

    def test_same_seed_same_sequence(self):
        first = RandomSource(seed=7)
        second = RandomSource(seed=7)

        assert [first.random() for _ in range(5)] == [second.random() for _ in range(5)]
        assert first.randint(1, 100) == second.randint(1, 100)

    def test_reseed_restarts_sequence(self):
        source = RandomSource(seed=3)
        expected = [source.random() for _ in range(3)]

        source.reseed(3)
        assert [source.random() for _ in range(3)] == expected
        assert source.seed == 3

    def test_shuffle_and_choice_stay_in_bounds(self):
        source = RandomSource(seed=1)
        items = list(range(10))
        source.shuffle(items)

        assert sorted(items) == list(range(10))
        assert source.choice(items) in items
        assert 2 <= source.uniform(2, 3) <= 3


@pytest.fixture
def package_logger():
    """Package logger restored to its original state after the test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    original_level = logger.level
    original_handlers = list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        if handler not in original_handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(original_level)


class TestLoggingConfig:
    """Test logging setup helpers."""

    def test_setup_logging_creates_rotating_files(self, tmp_path, package_logger):
        log_dir = tmp_path / "logs"

        setup_logging(level="DEBUG", log_dir=str(log_dir), enable_console=False)

        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 3
        assert (log_dir / "front_office.log").exists()
        assert (log_dir / "front_office_debug.log").exists()
        assert (log_dir / "front_office_error.log").exists()

    def test_setup_logging_replaces_previous_handlers(self, tmp_path, package_logger):
        setup_logging(level="INFO", log_dir=str(tmp_path), enable_console=True, enable_file=False)
        setup_logging(level="INFO", log_dir=str(tmp_path), enable_console=True, enable_file=False)

        assert len(package_logger.handlers) == 1

    def test_engine_messages_reach_log_file(self, tmp_path, package_logger):
        setup_logging(level="INFO", log_dir=str(tmp_path), enable_console=False)

        get_logger("front_office.services.free_agency_service").info("Player 12 signed with team 3")
        for handler in package_logger.handlers:
            handler.flush()

        assert "Player 12 signed with team 3" in (tmp_path / "front_office.log").read_text()

    def test_log_context_restores_level(self):
        logger = get_logger("front_office.offseason.test_context")
        logger.setLevel(logging.WARNING)

        with LogContext(logger, "DEBUG"):
            assert logger.level == logging.DEBUG

        assert logger.level == logging.WARNING

    def test_configure_module_logger(self):
        logger = configure_module_logger("front_office.database.test_module", level="ERROR", propagate=False)

        assert logger.level == logging.ERROR
        assert logger.propagate is False

    def test_log_exception_includes_context(self, caplog):
        logger = get_logger("front_office.test_exceptions")

        try:
            raise ConstraintError("Cap space exhausted")
        except ConstraintError as e:
            with caplog.at_level(logging.ERROR, logger="front_office.test_exceptions"):
                log_exception(logger, e, context={"team_id": 3})

        assert "team_id=3" in caplog.text
        assert "ConstraintError" in caplog.text

    def test_log_exception_uses_engine_context(self, caplog):
        logger = get_logger("front_office.test_exceptions")
        error = NotFoundError("Contract missing", context_dict={"contract_id": 8})

        with caplog.at_level(logging.ERROR, logger="front_office.test_exceptions"):
            log_exception(logger, error, context={"season": 2026})

        assert "FO_NOT_FOUND_002" in caplog.text
        assert "contract_id=8, season=2026" in caplog.text

    def test_testing_preset_has_no_files(self, tmp_path, package_logger):
        setup_preset("testing", log_dir=str(tmp_path / "logs"))

        assert package_logger.level == logging.WARNING
        assert len(package_logger.handlers) == 1
        assert not (tmp_path / "logs").exists()

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            setup_preset("staging")

    def test_ai_logging_levels(self):
        loggers = [logging.getLogger(name) for name in ("front_office.offseason", "front_office.offseason.draft_ai")]
        original = [logger.level for logger in loggers]

        try:
            setup_ai_logging("DEBUG")
            assert all(logger.level == logging.DEBUG for logger in loggers)
        finally:
            for logger, level in zip(loggers, original):
                logger.setLevel(level)
