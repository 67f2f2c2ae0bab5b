import pytest

from core.config import DEFAULT_TIMEOUT, DomainGuard, SocrataConfig
from core.errors import DomainNotAllowed


def test_empty_allowlist_permits_every_domain():
    guard = DomainGuard(())
    guard.validate("data.x.org")
    guard.validate("anything.example.com")


def test_allowlisted_domain_passes():
    DomainGuard(("data.x.org",)).validate("data.x.org")


def test_unlisted_domain_is_rejected_with_allowed_set():
    guard = DomainGuard(("data.x.org", "data.z.org"))

    with pytest.raises(DomainNotAllowed) as excinfo:
        guard.validate("data.y.org")

    assert excinfo.value.domain == "data.y.org"
    assert excinfo.value.allowed == ("data.x.org", "data.z.org")
    assert "data.x.org, data.z.org" in str(excinfo.value)


@pytest.mark.parametrize("domain", ["Data.X.org", "x.org", "sub.data.x.org", " data.x.org"])
def test_matching_is_exact_and_case_sensitive(domain: str):
    with pytest.raises(DomainNotAllowed):
        DomainGuard(("data.x.org",)).validate(domain)


def test_from_env_parses_allowlist_and_credentials():
    config = SocrataConfig.from_env(
        {
            "SOCRATA_DOMAIN": " data.a.gov, data.b.gov ,,",
            "SOCRATA_ID": "app",
            "SOCRATA_SECRET": "s3cret",
            "SOCRATA_TIMEOUT": "5",
        }
    )

    assert config.allowed_domains == ("data.a.gov", "data.b.gov")
    assert config.has_credentials is True
    assert config.timeout == 5.0


def test_from_env_defaults():
    config = SocrataConfig.from_env({})

    assert config.allowed_domains == ()
    assert config.has_credentials is False
    assert config.timeout == DEFAULT_TIMEOUT


def test_credentials_need_both_halves():
    assert SocrataConfig.from_env({"SOCRATA_ID": "app"}).has_credentials is False
    assert SocrataConfig.from_env({"SOCRATA_SECRET": "x"}).has_credentials is False
