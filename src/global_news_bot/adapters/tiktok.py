"""TikTok publish driver – Playwright (sync API, Chromium) over the web creator center."""

from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from global_news_bot.domain.models import PublishCredentials
from global_news_bot.ports.interfaces import IPublishDriver

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--disable-gpu",
]
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

USERNAME_INPUT = 'input[name="username"]'
PASSWORD_INPUT = 'input[type="password"]'
LOGIN_BUTTON = 'button[type="submit"]'
FILE_INPUT = 'input[type="file"]'
CAPTION_INPUT = '[data-testid="editor-caption"], [contenteditable="true"], textarea'
PUBLIC_TOGGLE = '[data-testid="public-post-toggle"]'
POST_BUTTON = 'button[data-testid="post-button"], button:has-text("Post")'
POST_CONFIRMATION = 'text=/Your video (has been|is being) (uploaded|posted)|Manage your posts/i'


class PlaywrightTikTokDriver(IPublishDriver):
    """
    One browser session per instance. The browser is launched lazily on authenticate()
    and torn down by close(), which is safe to call at any point.
    """

    def __init__(
        self,
        *,
        login_url: str = "https://www.tiktok.com/login/phone-or-email/email",
        upload_url: str = "https://www.tiktok.com/creator-center/upload",
        headless: bool = True,
        navigation_timeout_ms: int = 60000,
        processing_timeout_ms: int = 120000,
        confirmation_timeout_ms: int = 60000,
    ):
        self.login_url = login_url
        self.upload_url = upload_url
        self.headless = headless
        self.navigation_timeout_ms = navigation_timeout_ms
        self.processing_timeout_ms = processing_timeout_ms
        self.confirmation_timeout_ms = confirmation_timeout_ms
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    def _open(self) -> None:
        print("🚀 Launching browser for TikTok posting...")
        self._playwright = sync_playwright().start()
        self._browser = self._playwright.chromium.launch(headless=self.headless, args=BROWSER_ARGS)
        self._context = self._browser.new_context(user_agent=BROWSER_USER_AGENT)
        self._page = self._context.new_page()
        self._page.set_default_navigation_timeout(self.navigation_timeout_ms)

    def authenticate(self, credentials: PublishCredentials) -> bool:
        if self._page is None:
            self._open()
        print("🔐 Logging in to TikTok...")
        page = self._page
        page.goto(self.login_url, wait_until="networkidle")
        page.fill(USERNAME_INPUT, credentials.username)
        page.fill(PASSWORD_INPUT, credentials.password)
        page.click(LOGIN_BUTTON)
        try:
            page.wait_for_url(lambda url: "/login" not in url, timeout=self.navigation_timeout_ms)
        except PlaywrightTimeoutError:
            print("  ❌ Login did not complete (still on login page)")
            return False
        print("📤 Navigating to upload page...")
        page.goto(self.upload_url, wait_until="networkidle")
        return True

    def upload_media(self, path: Optional[str]) -> bool:
        page = self._page
        if not path:
            return True
        print("📹 Uploading video...")
        page.locator(FILE_INPUT).first.set_input_files(path)
        print("⏳ Waiting for video processing...")
        try:
            page.locator(CAPTION_INPUT).first.wait_for(state="visible", timeout=self.processing_timeout_ms)
        except PlaywrightTimeoutError:
            print("  ❌ Video was not processed in time")
            return False
        return True

    def set_caption(self, text: str) -> bool:
        print("✍️  Adding caption and hashtags...")
        self._page.locator(CAPTION_INPUT).first.fill(text)
        try:
            self._page.click(PUBLIC_TOGGLE, timeout=3000)
        except PlaywrightTimeoutError:
            print("  Public toggle not found, likely already public")
        return True

    def submit(self) -> bool:
        print("🚀 Publishing video...")
        self._page.click(POST_BUTTON)
        try:
            self._page.wait_for_selector(POST_CONFIRMATION, timeout=self.confirmation_timeout_ms)
        except PlaywrightTimeoutError:
            print("  ❌ No posting confirmation from TikTok")
            return False
        print("✅ Successfully posted to TikTok!")
        return True

    def close(self) -> None:
        for resource in (self._context, self._browser):
            if resource is not None:
                try:
                    resource.close()
                except PlaywrightError as e:
                    print(f"  ⚠️  Browser cleanup error: {e}")
        if self._playwright is not None:
            self._playwright.stop()
        self._page = self._context = self._browser = self._playwright = None
