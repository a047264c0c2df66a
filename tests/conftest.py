pytest_plugins = [
    "conf_env",
    "conf_utils",
    "conf_mock",
    "conf_core",
]
