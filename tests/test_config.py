from __future__ import annotations

from storefront.config import Settings, mask


def test_settings_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("RAZORPAY_KEY_ID", "rzp_live_abcd")
    monkeypatch.setenv("RAZORPAY_KEY_SECRET", "s3cret")
    monkeypatch.setenv("FIREBASE_PROJECT_ID", "shop-prod")
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("PORT", "8080")

    s = Settings()

    assert s.razorpay_key_id == "rzp_live_abcd"
    assert s.firebase_project_id == "shop-prod"
    assert s.port == 8080
    assert s.is_production
    assert s.razorpay_configured


def test_missing_required_lists_env_names(monkeypatch) -> None:
    monkeypatch.delenv("FIREBASE_CRED_FILE", raising=False)
    s = Settings(razorpay_key_id="k", razorpay_key_secret="", firebase_project_id="p",
                 firebase_client_email="", firebase_private_key="", firebase_private_key_id="",
                 firebase_client_cert_url="")

    assert s.missing_required() == [
        "RAZORPAY_KEY_SECRET",
        "FIREBASE_CLIENT_EMAIL",
        "FIREBASE_PRIVATE_KEY",
        "FIREBASE_PRIVATE_KEY_ID",
        "FIREBASE_CLIENT_CERT_URL",
    ]


def test_cred_file_replaces_env_credentials(tmp_path) -> None:
    cred = tmp_path / "service_account.json"
    cred.write_text("{}")
    s = Settings(razorpay_key_id="k", razorpay_key_secret="s", firebase_project_id="p",
                 firebase_client_email="", firebase_private_key="", firebase_private_key_id="",
                 firebase_client_cert_url="", firebase_cred_file=str(cred))
    assert s.missing_required() == []


def test_service_account_unescapes_private_key() -> None:
    s = Settings(firebase_project_id="p", firebase_private_key="-----BEGIN-----\\nAAA\\n-----END-----\\n")
    info = s.service_account_info()
    assert info["private_key"] == "-----BEGIN-----\nAAA\n-----END-----\n"
    assert info["type"] == "service_account"
    assert info["project_id"] == "p"


def test_origins_and_collection_prefix() -> None:
    assert Settings(allowed_origins="*").origins == ["*"]
    assert Settings(allowed_origins="https://a.com, https://b.com").origins == ["https://a.com", "https://b.com"]
    assert Settings(firebase_collection_prefix="dev_").collection("orders") == "dev_orders"
    assert Settings(firebase_collection_prefix="").collection("orders") == "orders"


def test_mask_keeps_last_four() -> None:
    assert mask("rzp_test_1234abcd") == "***abcd"
    assert mask("") == "Not set"
