from apisvc.http.exception import (
    BadRequestException,
    EnvironmentNotEmptyException,
    EnvironmentNotFoundException,
    InternalServerException,
    ProjectNotFoundException,
    SlugAlreadyExistsException,
    StoreUnavailableException,
)
from apisvc.http.exception.mapping import to_api_exception
from apisvc.public.errors import (
    EnvironmentNotEmptyError,
    EnvironmentNotFoundError,
    InvalidConfigValueError,
    ProjectNotFoundError,
    SlugConflictError,
    SnapshotError,
    UpstreamStoreError,
)


class TestToDict:
    def test_renders_error_code_only(self):
        assert ProjectNotFoundException().to_dict() == {"error": "project_not_found"}
        assert EnvironmentNotFoundException().to_dict() == {"error": "environment_not_found"}

    def test_custom_detail_does_not_leak_into_body(self):
        exc = EnvironmentNotFoundException("environment not found: acme/staging")

        assert exc.detail == "environment not found: acme/staging"
        assert exc.to_dict() == {"error": "environment_not_found"}

    def test_context_is_included_when_set(self):
        exc = BadRequestException(context={"field": "value"})

        assert exc.to_dict() == {"error": "bad_request", "context": {"field": "value"}}


class TestToApiException:
    def test_project_not_found(self):
        exc = to_api_exception(ProjectNotFoundError("acme"))

        assert isinstance(exc, ProjectNotFoundException)
        assert exc.status_code == 404

    def test_environment_not_found(self):
        exc = to_api_exception(EnvironmentNotFoundError("staging", "acme"))

        assert isinstance(exc, EnvironmentNotFoundException)
        assert exc.status_code == 404

    def test_slug_conflict(self):
        exc = to_api_exception(SlugConflictError("acme"))

        assert isinstance(exc, SlugAlreadyExistsException)
        assert exc.status_code == 409

    def test_environment_not_empty(self):
        exc = to_api_exception(EnvironmentNotEmptyError("prod", flags=2, configs=1))

        assert isinstance(exc, EnvironmentNotEmptyException)
        assert exc.status_code == 409
        assert exc.to_dict() == {
            "error": "cannot_delete_environment_with_flags_or_configs",
            "flags": 2,
            "configs": 1,
        }

    def test_invalid_config_value(self):
        exc = to_api_exception(InvalidConfigValueError("bad"))

        assert isinstance(exc, BadRequestException)
        assert exc.status_code == 400

    def test_store_outage_is_a_server_error(self):
        exc = to_api_exception(UpstreamStoreError("down"))

        assert isinstance(exc, StoreUnavailableException)
        assert exc.status_code == 503
        assert exc.to_dict() == {"error": "store_unavailable"}

    def test_unknown_error_is_internal(self):
        exc = to_api_exception(SnapshotError("boom"))

        assert isinstance(exc, InternalServerException)
        assert exc.status_code == 500
