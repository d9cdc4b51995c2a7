import pytest

from yunying.login import (
    SMS_BUTTON_TEXT,
    LoginError,
    QrCodeStatus,
    SmsCooldown,
    qr_status_message,
    verify_credentials,
    verify_sms,
)


def test_verify_credentials_trims():
    password = "password"
    assert verify_credentials("  user@example.com ", f" {password} ") == (
        "user@example.com",
        password,
    )


def test_verify_credentials_empty_username():
    with pytest.raises(LoginError, match="请输入用户名！"):
        verify_credentials("   ", "password")


def test_verify_credentials_empty_password():
    with pytest.raises(LoginError, match="请输入密码！"):
        verify_credentials("user@example.com", "  ")


def test_verify_credentials_short_password():
    with pytest.raises(LoginError, match="密码长度不能少于6位！"):
        verify_credentials("user@example.com", "abc")


def test_verify_sms_returns_trimmed_code():
    assert verify_sms(" abcd ", " 654321 ") == "654321"


@pytest.mark.parametrize(
    "suffix, code, message",
    [
        ("abc", "654321", "请输入正确的登陆账号绑定的证件号后4位"),
        ("abcde", "654321", "请输入正确的登陆账号绑定的证件号后4位"),
        ("abcd", "  ", "请输入验证码"),
        ("abcd", "12345", "请输入正确的验证码"),
    ],
)
def test_verify_sms_rejects(suffix, code, message):
    with pytest.raises(LoginError) as excinfo:
        verify_sms(suffix, code)
    assert str(excinfo.value) == message


def test_qr_status_messages():
    assert qr_status_message(0) is None
    assert qr_status_message(1) == "已扫码，请在12306 APP上点击确认"
    assert qr_status_message(2) is None
    assert qr_status_message(3) == "二维码已失效，点击刷新"
    assert qr_status_message(5) == "系统错误，点击刷新"


def test_qr_unknown_status_is_expired():
    assert qr_status_message(4) == qr_status_message(QrCodeStatus.EXPIRED)
    assert qr_status_message(99) == qr_status_message(3)


@pytest.mark.parametrize(
    "status, stops, message",
    [
        (QrCodeStatus.UNSCANNED, False, None),
        (QrCodeStatus.SCANNED, False, "已扫码，请在12306 APP上点击确认"),
        (QrCodeStatus.CONFIRMED, True, None),
        (QrCodeStatus.EXPIRED, True, "二维码已失效，点击刷新"),
        (QrCodeStatus.SYSTEM_ERROR, True, "系统错误，点击刷新"),
    ],
)
def test_qr_stops_polling(status, stops, message):
    assert qr_status_message(status) == message
    assert status.stops_polling is stops


def test_sms_cooldown_counts_down():
    cooldown = SmsCooldown()
    assert cooldown.label == SMS_BUTTON_TEXT
    assert cooldown.start() == "60"
    assert cooldown.tick() == "59"
    labels = [cooldown.tick() for _ in range(58)]
    assert labels[-1] == "1"
    assert cooldown.active
    assert cooldown.tick() == SMS_BUTTON_TEXT
    assert not cooldown.active


def test_sms_cooldown_tick_when_idle_keeps_label():
    cooldown = SmsCooldown(seconds=3)
    assert cooldown.tick() == SMS_BUTTON_TEXT
    assert cooldown.remaining == 0


def test_sms_cooldown_start_twice_rejected():
    cooldown = SmsCooldown(seconds=3)
    cooldown.start()
    with pytest.raises(LoginError):
        cooldown.start()


def test_sms_can_send():
    cooldown = SmsCooldown(seconds=2)
    assert cooldown.can_send("abcd")
    assert not cooldown.can_send("abc")
    cooldown.start()
    assert not cooldown.can_send("abcd")
    cooldown.tick()
    cooldown.tick()
    assert cooldown.can_send("abcd")


def test_sms_cooldown_invalid_length():
    with pytest.raises(ValueError):
        SmsCooldown(seconds=0)