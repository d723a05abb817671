# Руководство к файлу
# Назначение: параметры запуска краулера (seeds, глубина, параллельность, задержка, сетевые лимиты).
# Этап: расширенная реализация. Включает валидацию до начала обхода.
# Обновляйте комментарий при изменениях.

from dataclasses import dataclass
from typing import List, Optional

from httpsyet.core.errors import ConfigurationError

DEFAULT_PARALLEL = 10


@dataclass
class CrawlConfig:
    """Конфигурация обхода и проверки ссылок на HTTPS."""

    # Входные данные
    seeds: List[str]

    # Ограничения обхода: 0 — без ограничения глубины
    depth: int = 0

    # Конкурентность: None/0 — значение по умолчанию
    parallel: Optional[int] = None
    delay: float = 0.0
    per_host_rps: Optional[float] = None

    # Сетевые настройки
    user_agent: str = "httpsyet/0.1 (+https://qvl.io/httpsyet)"
    request_timeout_ms: int = 15000
    max_redirects: int = 10

    # Отладка и остановка
    verbose: bool = False
    timeout: Optional[float] = None

    def validate(self) -> None:
        if not self.seeds:
            raise ConfigurationError("no sites given")
        if self.depth < 0:
            raise ConfigurationError("depth cannot be negative")
        if self.parallel is not None and self.parallel < 0:
            raise ConfigurationError("parallel cannot be negative")
        if self.delay < 0:
            raise ConfigurationError("delay cannot be negative")
        if self.per_host_rps is not None and self.per_host_rps <= 0:
            raise ConfigurationError("per-host rps must be positive")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.request_timeout_ms <= 0:
            raise ConfigurationError("request timeout must be positive")

    @property
    def workers(self) -> int:
        return self.parallel or DEFAULT_PARALLEL

    @property
    def seed_depth(self) -> Optional[int]:
        """Глубина для seed-задач: None — без ограничения."""
        return self.depth or None
