import configparser
import logging

SUPPORTED_LANGUAGES = ("en", "es")
MAX_DECIMALS = 15

LOG_FORMAT = "%(asctime)s [%(levelname)s] - %(funcName)s(%(lineno)d) - %(message)s"


def load_settings(config_file):
    """Crea el ConfigParser con los valores por defecto y superpone los del fichero .ini."""
    config = configparser.ConfigParser()
    config["Settings"] = {
        "Language": "en",
        "LogLevel": "INFO",
    }
    config["Display"] = {
        "decimals": "6",
        "history_size": "100",
        "show_help": "True",
    }
    config.read(config_file, encoding="utf-8")
    sanitize_config(config)
    return config


def sanitize_config(config):
    # Sanear cosas que pueden venir mal del fichero
    settings = config["Settings"]
    if settings["LogLevel"].upper() not in logging.getLevelNamesMapping():
        settings["LogLevel"] = "INFO"
    else:
        settings["LogLevel"] = settings["LogLevel"].upper()
    if settings["Language"] not in SUPPORTED_LANGUAGES:
        settings["Language"] = "en"

    display = config["Display"]
    try:
        decimals = display.getint("decimals")
        display["decimals"] = str(min(max(decimals, 0), MAX_DECIMALS))
    except ValueError:
        display["decimals"] = "6"
    try:
        history_size = display.getint("history_size")
        display["history_size"] = str(max(history_size, 0))
    except ValueError:
        display["history_size"] = "100"
    try:
        display.getboolean("show_help")
    except ValueError:
        display["show_help"] = "True"
    return config


def save_settings(config, config_file):
    """Guarda la configuración actual en el archivo .ini."""
    # Primero me aseguro de no guardar nada incorrecto
    sanitize_config(config)
    with open(config_file, "w", encoding="utf-8") as configfile:
        config.write(configfile)
    logging.info(f"Configuration saved to '{config_file}'")


def get_config(config):
    """
    Devuelve un diccionario con todas las opciones de configuración con sus tipos correctos
    """
    Settings = config["Settings"]
    Display = config["Display"]
    return {
        "Settings": {
            "Language": Settings["Language"],
            "LogLevel": Settings["LogLevel"],
        },
        "Display": {
            "decimals": Display.getint("decimals"),
            "history_size": Display.getint("history_size"),
            "show_help": Display.getboolean("show_help"),
        },
    }


def setup_logging(app_name, loglevel):
    level = logging.getLevelNamesMapping()[loglevel]
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(app_name + ".log", encoding="utf-8"),
        ],
    )
