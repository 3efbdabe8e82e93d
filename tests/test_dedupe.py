from ai_tools_directory.dedupe import KnownTools
from ai_tools_directory.dedupe import extract_domain
from ai_tools_directory.dedupe import is_duplicate


def test_extract_domain_strips_www_and_lowercases():
    assert extract_domain("https://WWW.Example.com/path?q=1") == "example.com"


def test_extract_domain_keeps_other_subdomains():
    assert extract_domain("https://app.example.com") == "app.example.com"


def test_extract_domain_returns_none_without_host():
    assert extract_domain("not a url") is None
    assert extract_domain("") is None


def test_is_duplicate_matches_domain(sample_tools):
    assert is_duplicate("https://chatgpt.com/pricing", "Something Else", sample_tools)


def test_is_duplicate_matches_name_case_insensitively(sample_tools):
    assert is_duplicate("https://new-domain.ai", "writesonic", sample_tools)


def test_is_duplicate_accepts_new_candidate(sample_tools):
    assert not is_duplicate("https://brand-new.ai", "Brand New", sample_tools)


def test_is_duplicate_treats_unparseable_url_as_duplicate(sample_tools):
    assert is_duplicate("::::", "Brand New", sample_tools)


class TestKnownTools:
    def test_contains_existing_domain_and_name(self, sample_tools):
        known = KnownTools(sample_tools)
        assert known.contains("https://www.writesonic.com/blog", "Other")
        assert known.contains("https://other.ai", "CHATGPT")

    def test_add_makes_later_candidates_duplicates(self):
        known = KnownTools()
        assert not known.contains("https://fresh.ai", "Fresh")
        known.add({"name": "Fresh", "url": "https://www.fresh.ai"})
        assert known.contains("https://fresh.ai/app", "Different")
        assert known.contains("https://another.ai", "fresh")

    def test_agrees_with_is_duplicate(self, sample_tools):
        known = KnownTools(sample_tools)
        for url, name in [
            ("https://writesonic.com", "x"),
            ("https://x.ai", "ChatGPT"),
            ("https://x.ai", "x"),
            ("bad url", "x"),
        ]:
            assert known.contains(url, name) == is_duplicate(url, name, sample_tools)
