from __future__ import annotations

import logging
import re

from ..errors import InstallerError
from .locale_gen import DEFAULT_LOCALE, apply_locale, available_locales, backup_template, enabled_locales, language_tag
from .prompt import Prompter
from .selector import select
from .staging import StagingStore
from .timezone import Timezone, list_cities, list_continents

logger = logging.getLogger(__name__)

HOSTNAME_RE = re.compile(r"[A-Za-z0-9]+(-[A-Za-z0-9]+)*")

LOCALE_TEMPLATE = "etc/locale.gen"


def is_valid_hostname(name: str) -> bool:
    return HOSTNAME_RE.fullmatch(name) is not None


def render_hosts(hostname: str) -> str:
    return (
        "127.0.0.1\tlocalhost\n"
        "::1\tlocalhost\n"
        f"127.0.1.1\t{hostname}.localdomain {hostname}\n"
    )


class ConfigCollector:
    """Asks for hostname, timezone and locale and stages them on the target."""

    def __init__(
        self,
        *,
        prompter: Prompter,
        store: StagingStore,
        zoneinfo_dir: str,
        timezone_page_size: int = 30,
        locale_page_size: int = 30,
        default_locale: str = DEFAULT_LOCALE,
    ) -> None:
        self.prompter = prompter
        self.store = store
        self.zoneinfo_dir = zoneinfo_dir
        self.timezone_page_size = timezone_page_size
        self.locale_page_size = locale_page_size
        self.default_locale = default_locale

    def collect_hostname(self) -> str:
        while True:
            name = self.prompter.ask("Please enter a new hostname: ")
            if is_valid_hostname(name):
                break
            self.prompter.say(
                "Invalid hostname. Hostnames must consist of alphanumeric characters and hyphens "
                "(cannot start or end with a hyphen, and no spaces allowed)."
            )

        self.store.put("hostname", name + "\n")
        self.store.put("hosts", render_hosts(name))
        self.prompter.say(f"Hostname updated to {name}")
        return name

    def collect_timezone(self) -> Timezone:
        continents = list_continents(self.zoneinfo_dir)
        if not continents:
            raise InstallerError(f"No timezone regions found under {self.zoneinfo_dir}")

        while True:
            idx = select(continents, self.timezone_page_size, self.prompter, title="Select a continent:")
            continent = continents[idx]
            cities = list_cities(self.zoneinfo_dir, continent)
            if cities:
                break
            self.prompter.say(f"No cities found under {continent}, pick another continent.")

        idx = select(cities, self.timezone_page_size, self.prompter, title="Select a city:")
        tz = Timezone(continent=continent, city=cities[idx])

        self.store.put("timezone", f"{tz}\n")
        return tz

    def collect_locale(self) -> str:
        template = self.store.root / LOCALE_TEMPLATE
        if not template.is_file():
            raise InstallerError(f"{template} missing; was the base system bootstrapped?")

        backup_template(template)
        text = template.read_text(encoding="utf-8")
        candidates = available_locales(text)

        if candidates:
            idx = select(
                candidates,
                self.locale_page_size,
                self.prompter,
                title="Select a locale:",
                default=self.default_locale,
            )
        else:
            self.prompter.say(f"No disabled locales found in {template}; using {self.default_locale}.")
            idx = None
        entry = self.default_locale if idx is None else candidates[idx]

        changed = apply_locale(template, entry)
        if not changed and entry not in enabled_locales(template.read_text(encoding="utf-8")):
            logger.warning("Locale %r is not listed in %s", entry, str(template))

        tag = language_tag(entry)
        self.store.put("locale_conf", f"LANG={tag}\n")
        self.prompter.say(f"Locale selected: {entry}")
        return tag
