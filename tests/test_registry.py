# ============================================================================
# REGISTRY TESTS
# ============================================================================
# STATUS: Tests - HealthCheckBuilder and group registration
# PURPOSE: Verify guard clauses, name uniqueness and group wiring
# CREATED: 19 OCT 2026
# ============================================================================
"""
Registry Tests

Covers:
1. Argument guards on add_check / add_check_type
2. Global, case-insensitive name uniqueness
3. Default cache duration and partial-success status
4. Groups: flat namespace, synthetic root check, nesting refused
5. Failed group registration leaves the builder untouched

Run with:
    pytest tests/test_registry.py -v
"""

import pytest

from healthchecks import (
    CheckStatus,
    DuplicateNameError,
    GroupCachedHealthCheck,
    HealthCheckBuilder,
    HealthCheckResult,
    InstanceCachedHealthCheck,
    InvalidArgumentError,
    SingletonResolver,
    TypeCachedHealthCheck,
    UnsupportedOperationError,
)

from conftest import CountingCheck


def _ok():
    return HealthCheckResult.healthy("ok")


# ============================================================================
# ADD CHECK
# ============================================================================

class TestAddCheck:

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_rejected(self, builder, name):
        with pytest.raises(InvalidArgumentError) as exc_info:
            builder.add_check(name, _ok)
        assert exc_info.value.argument_name == "name"

    def test_missing_check_rejected(self, builder):
        with pytest.raises(InvalidArgumentError):
            builder.add_check("db", None)

    def test_non_callable_rejected(self, builder):
        with pytest.raises(InvalidArgumentError):
            builder.add_check("db", 42)

    def test_negative_cache_duration_rejected(self, builder):
        with pytest.raises(InvalidArgumentError):
            builder.add_check("db", _ok, cache_duration=-5)
        assert "db" not in builder

    def test_function_and_instance_registration(self, builder):
        probe = CountingCheck()
        builder.add_check("fn", _ok).add_check("instance", probe)

        assert isinstance(builder.get_check("fn"), InstanceCachedHealthCheck)
        assert builder.get_check("instance").check is probe
        assert len(builder) == 2

    def test_duplicate_name_rejected_case_insensitively(self, builder):
        builder.add_check("Database", _ok)

        with pytest.raises(DuplicateNameError) as exc_info:
            builder.add_check("database", _ok)
        assert str(exc_info.value) == "Check name 'database' has already been registered."

    def test_duplicate_across_registration_kinds(self, builder):
        builder.add_check("counting", _ok)
        with pytest.raises(DuplicateNameError):
            builder.add_check_type("COUNTING", CountingCheck)

    def test_add_check_type(self):
        builder = HealthCheckBuilder(resolver=SingletonResolver())
        builder.add_check_type("counting", CountingCheck, cache_duration=15)

        cached = builder.get_check("counting")
        assert isinstance(cached, TypeCachedHealthCheck)
        assert cached.check_type is CountingCheck
        assert cached.cache_duration == 15.0

    def test_add_check_type_requires_health_check_subclass(self, builder):
        with pytest.raises(InvalidArgumentError):
            builder.add_check_type("dict", dict)


# ============================================================================
# DEFAULTS
# ============================================================================

class TestDefaults:

    def test_default_cache_duration_is_five_minutes(self):
        builder = HealthCheckBuilder()
        builder.add_check("db", _ok)
        assert builder.get_check("db").cache_duration == 300.0

    def test_default_applies_to_later_registrations(self):
        builder = HealthCheckBuilder()
        builder.add_check("before", _ok)
        builder.with_default_cache_duration(30).add_check("after", _ok)

        assert builder.get_check("before").cache_duration == 300.0
        assert builder.get_check("after").cache_duration == 30.0

    def test_explicit_duration_wins(self):
        builder = HealthCheckBuilder(default_cache_duration=30)
        builder.add_check("db", _ok, cache_duration=0)
        assert builder.get_check("db").cache_duration == 0.0

    def test_negative_default_rejected(self, builder):
        with pytest.raises(InvalidArgumentError) as exc_info:
            builder.with_default_cache_duration(-1)
        assert "Duration must be zero (disabled) or a positive duration." in str(exc_info.value)

    def test_root_partial_status_defaults_to_unhealthy(self, builder):
        assert builder.root_group.partially_healthy_status == CheckStatus.UNHEALTHY

    def test_partial_status_can_be_changed(self, builder):
        builder.with_partial_success_status(CheckStatus.WARNING)
        assert builder.root_group.partially_healthy_status == CheckStatus.WARNING

    def test_unknown_partial_status_rejected(self, builder):
        with pytest.raises(InvalidArgumentError) as exc_info:
            builder.with_partial_success_status(CheckStatus.UNKNOWN)
        assert "Check status 'Unknown' is not valid for partial success." in str(exc_info.value)


# ============================================================================
# GROUPS
# ============================================================================

class TestGroups:

    def test_group_members_join_flat_namespace(self, builder):
        builder.add_check("disk", _ok)
        builder.add_group("upstreams", lambda group: (
            group.add_check("billing", _ok),
            group.add_check("search", _ok),
        ))

        assert set(builder.checks_by_name) == {"disk", "billing", "search", "Group(upstreams)"}
        assert [c.name for c in builder.root_group.checks] == ["disk", "Group(upstreams)"]

    def test_group_definition(self, builder):
        builder.add_group("upstreams", lambda group: group.add_check("billing", _ok))

        group = builder.get_group("UPSTREAMS")
        assert group.name == "upstreams"
        assert group.partially_healthy_status == CheckStatus.WARNING
        assert [c.name for c in group.checks] == ["billing"]

        synthetic = builder.get_check("Group(upstreams)")
        assert isinstance(synthetic, GroupCachedHealthCheck)
        assert synthetic.cache_duration == 0.0
        assert synthetic.group is group

    def test_group_partial_status(self, builder):
        builder.add_group(
            "upstreams",
            lambda group: group.add_check("billing", _ok),
            partially_healthy_status=CheckStatus.UNHEALTHY,
        )
        assert builder.get_group("upstreams").partially_healthy_status == CheckStatus.UNHEALTHY

    def test_members_use_builder_default_duration(self):
        builder = HealthCheckBuilder(default_cache_duration=45)
        builder.add_group("upstreams", lambda group: group.add_check("billing", _ok))
        assert builder.get_check("billing").cache_duration == 45.0

    def test_duplicate_group_rejected(self, builder):
        builder.add_group("upstreams", lambda group: group.add_check("billing", _ok))

        with pytest.raises(DuplicateNameError) as exc_info:
            builder.add_group("Upstreams", lambda group: group.add_check("search", _ok))
        assert str(exc_info.value) == "A group with name 'Upstreams' has already been registered."

    def test_member_name_must_be_globally_unique(self, builder):
        builder.add_check("billing", _ok)

        with pytest.raises(DuplicateNameError):
            builder.add_group("upstreams", lambda group: group.add_check("billing", _ok))

    def test_failed_group_leaves_builder_untouched(self, builder):
        builder.add_check("billing", _ok)

        def configure(group):
            group.add_check("search", _ok)
            group.add_check("billing", _ok)

        with pytest.raises(DuplicateNameError):
            builder.add_group("upstreams", configure)

        assert "search" not in builder
        assert builder.get_group("upstreams") is None
        assert len(builder) == 1

    def test_nested_groups_refused(self, builder):
        def configure(group):
            group.add_check("billing", _ok)
            group.add_group("inner", lambda inner: inner.add_check("x", _ok))

        with pytest.raises(UnsupportedOperationError) as exc_info:
            builder.add_group("upstreams", configure)
        assert str(exc_info.value) == "Nested groups are not supported by HealthCheckBuilder."

    def test_empty_group_rejected(self, builder):
        with pytest.raises(InvalidArgumentError):
            builder.add_group("empty", lambda group: None)
        assert builder.get_group("empty") is None

    def test_group_builder_closed_after_configure(self, builder):
        captured = []
        builder.add_group("upstreams", lambda group: (
            captured.append(group),
            group.add_check("billing", _ok),
        ))

        with pytest.raises(UnsupportedOperationError):
            captured[0].add_check("late", _ok)

    @pytest.mark.parametrize("name", ["", " "])
    def test_blank_group_name_rejected(self, builder, name):
        with pytest.raises(InvalidArgumentError):
            builder.add_group(name, lambda group: group.add_check("billing", _ok))

    def test_unknown_group_status_rejected(self, builder):
        with pytest.raises(InvalidArgumentError):
            builder.add_group(
                "upstreams",
                lambda group: group.add_check("billing", _ok),
                partially_healthy_status=CheckStatus.UNKNOWN,
            )


# ============================================================================
# RESOLVER
# ============================================================================

class TestSingletonResolver:

    def test_one_instance_per_type(self):
        resolver = SingletonResolver()
        assert resolver.resolve(CountingCheck) is resolver.resolve(CountingCheck)

    def test_factory_must_return_health_check(self):
        resolver = SingletonResolver({CountingCheck: lambda: "not a check"})
        with pytest.raises(TypeError):
            resolver.resolve(CountingCheck)

    def test_register_replaces_instance(self):
        resolver = SingletonResolver()
        first = resolver.resolve(CountingCheck)
        replacement = CountingCheck()
        resolver.register(CountingCheck, lambda: replacement)

        assert resolver.resolve(CountingCheck) is replacement
        assert resolver.resolve(CountingCheck) is not first
