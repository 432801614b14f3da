"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, List
from pathlib import Path
import logging


DEFAULT_EXCLUDED_PATTERNS = [
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "*.lock",
    "dist/**",
    "build/**",
    "*.min.js",
    "*.map",
]


@dataclass
class AnalysisConfig:
    """변경 분석 설정"""
    source_extension: str = ".ts"
    max_concurrency: int = 8
    timeout_seconds: Optional[float] = None
    excluded_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_PATTERNS))


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        timeout = os.getenv("MR_CONTEXT_TIMEOUT")
        excluded = os.getenv("MR_CONTEXT_EXCLUDED_PATTERNS")

        return cls(
            analysis=AnalysisConfig(
                source_extension=os.getenv("MR_CONTEXT_SOURCE_EXTENSION", ".ts"),
                max_concurrency=int(os.getenv("MR_CONTEXT_MAX_CONCURRENCY", "8")),
                timeout_seconds=float(timeout) if timeout else None,
                excluded_patterns=(
                    [p.strip() for p in excluded.split(",") if p.strip()]
                    if excluded else list(DEFAULT_EXCLUDED_PATTERNS)
                ),
            ),
            logging=LoggingConfig(
                level=os.getenv("MR_CONTEXT_LOG_LEVEL", "WARNING"),
                format=os.getenv("MR_CONTEXT_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("MR_CONTEXT_LOG_FILE"),
                max_file_size=int(os.getenv("MR_CONTEXT_LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(os.getenv("MR_CONTEXT_LOG_BACKUP_COUNT", "5")),
            ),
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(
            analysis=AnalysisConfig(**config_data.get('analysis', {})),
            logging=LoggingConfig(**config_data.get('logging', {})),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        # 확장자 형식 확인
        if not self.analysis.source_extension.startswith('.'):
            errors.append(f"Source extension must start with '.': {self.analysis.source_extension}")

        if self.analysis.max_concurrency <= 0:
            errors.append("Max concurrency must be positive")

        if self.analysis.timeout_seconds is not None and self.analysis.timeout_seconds <= 0:
            errors.append("Timeout must be positive")

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigManager:
    """설정 관리자"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

    def _setup_logging(self) -> None:
        """로깅 설정"""
        level = getattr(logging, self._config.logging.level.upper())
        logging.basicConfig(
            level=level,
            format=self._config.logging.format,
        )
        logging.getLogger().setLevel(level)

        # 파일 로깅이 설정된 경우 로테이션 설정
        if self._config.logging.file_path:
            from logging.handlers import RotatingFileHandler

            handler = RotatingFileHandler(
                self._config.logging.file_path,
                maxBytes=self._config.logging.max_file_size,
                backupCount=self._config.logging.backup_count,
            )
            handler.setFormatter(logging.Formatter(self._config.logging.format))

            # 루트 로거에 핸들러 추가
            root_logger = logging.getLogger()
            root_logger.addHandler(handler)


def init_config(config: Optional[AppConfig] = None) -> AppConfig:
    """설정 검증 및 로깅 초기화"""
    return ConfigManager(config).config
