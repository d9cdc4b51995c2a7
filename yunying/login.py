"""Login form checks, QR code login states and the SMS code resend cooldown."""

import enum

SMS_COOLDOWN_SECONDS = 60
SMS_BUTTON_TEXT = "获取验证码"
ID_SUFFIX_LENGTH = 4
SMS_CODE_LENGTH = 6
MIN_PASSWORD_LENGTH = 6

_EXPIRED_MESSAGE = "二维码已失效，点击刷新"


class LoginError(ValueError):
    """Input on the login form was rejected; the message is shown to the user."""


class QrCodeStatus(enum.IntEnum):
    """State reported while polling a QR code login."""

    UNSCANNED = 0
    SCANNED = 1
    CONFIRMED = 2
    EXPIRED = 3
    SYSTEM_ERROR = 5

    @property
    def stops_polling(self):
        """Whether polling for this QR code should end."""
        return self not in (QrCodeStatus.UNSCANNED, QrCodeStatus.SCANNED)


def verify_credentials(username, password):
    """Check the account name and password; return them with whitespace trimmed.

    Raises LoginError with the message to show when the input is rejected.
    """
    username = username.strip()
    password = password.strip()
    if not username:
        raise LoginError("请输入用户名！")
    if not password:
        raise LoginError("请输入密码！")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise LoginError("密码长度不能少于6位！")
    return username, password


def verify_sms(id_suffix, code):
    """Check the ID number suffix and SMS code; return the trimmed code.

    Raises LoginError with the message to show when the input is rejected.
    """
    if len(id_suffix.strip()) != ID_SUFFIX_LENGTH:
        raise LoginError("请输入正确的登陆账号绑定的证件号后4位")
    code = code.strip()
    if not code:
        raise LoginError("请输入验证码")
    if len(code) != SMS_CODE_LENGTH:
        raise LoginError("请输入正确的验证码")
    return code


def qr_status_message(status):
    """Return the tip to show for a QR code status, or None when nothing changes.

    Unknown statuses are treated as an expired code.
    """
    try:
        status = QrCodeStatus(status)
    except ValueError:
        return _EXPIRED_MESSAGE
    if status is QrCodeStatus.SCANNED:
        return "已扫码，请在12306 APP上点击确认"
    if status is QrCodeStatus.EXPIRED:
        return _EXPIRED_MESSAGE
    if status is QrCodeStatus.SYSTEM_ERROR:
        return "系统错误，点击刷新"
    return None


class SmsCooldown:
    """Countdown that keeps the "send SMS code" button disabled after a request.

    Call :meth:`tick` once a second while :attr:`active` is true.
    """

    def __init__(self, seconds=SMS_COOLDOWN_SECONDS):
        if seconds <= 0:
            raise ValueError("cooldown must last at least one second")
        self.seconds = seconds
        self.remaining = 0

    @property
    def active(self):
        """Whether the countdown is running."""
        return self.remaining > 0

    @property
    def label(self):
        """Text shown on the button."""
        return str(self.remaining) if self.active else SMS_BUTTON_TEXT

    def can_send(self, id_suffix):
        """Whether a code may be requested for the given ID number suffix."""
        return not self.active and len(id_suffix.strip()) == ID_SUFFIX_LENGTH

    def start(self):
        """Start the countdown after a code was requested; return the button text."""
        if self.active:
            raise LoginError("验证码请求过于频繁")
        self.remaining = self.seconds
        return self.label

    def tick(self):
        """Advance the countdown by one second and return the button text."""
        if self.active:
            self.remaining -= 1
        return self.label