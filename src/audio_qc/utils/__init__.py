from .config import AnalysisConfig, ConfigLoadError, PROFILE_ENV_VAR, ProfileName, load_analysis_config

__all__ = [
    "AnalysisConfig",
    "ConfigLoadError",
    "PROFILE_ENV_VAR",
    "ProfileName",
    "load_analysis_config",
]
