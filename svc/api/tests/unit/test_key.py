from apisvc.public.key import derive_cache_key, sanitize_component


class TestSanitizeComponent:
    def test_keeps_allowed_characters(self):
        assert sanitize_component("Acme_prod-01") == "Acme_prod-01"

    def test_replaces_separator_and_control_characters(self):
        assert sanitize_component("a:b") == "a_b"
        assert sanitize_component("a\nb\tc") == "a_b_c"
        assert sanitize_component("a b/c*d") == "a_b_c_d"

    def test_replaces_non_ascii_characters(self):
        assert sanitize_component("café") == "caf_"

    def test_empty_string(self):
        assert sanitize_component("") == ""


class TestDeriveCacheKey:
    def test_plain_slugs(self):
        assert derive_cache_key("acme", "prod") == "public:acme:prod"

    def test_custom_prefix(self):
        assert derive_cache_key("acme", "prod", prefix="edge") == "edge:acme:prod"

    def test_is_deterministic(self):
        assert derive_cache_key("acme", "prod") == derive_cache_key("acme", "prod")

    def test_empty_components_still_produce_a_key(self):
        assert derive_cache_key("", "") == "public::"

    def test_separator_cannot_be_injected(self):
        key = derive_cache_key("a:b", "c")

        assert key == "public:a_b:c"
        assert key.count(":") == 2

    def test_shifting_a_separator_between_components_does_not_collide(self):
        # both pairs join to "a:b:c" if left unsanitized
        assert derive_cache_key("a:b", "c") != derive_cache_key("a", "b:c")

    def test_distinct_environments_get_distinct_keys(self):
        assert derive_cache_key("acme", "prod") != derive_cache_key("acme", "staging")
        assert derive_cache_key("acme", "prod") != derive_cache_key("other", "prod")
