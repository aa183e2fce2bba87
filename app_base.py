# -*- coding: utf-8 -*-
#
# Purpose:  wx application object for Kalkulator: settings, logging and
#           translations.
#
# Inspired by the I18N wxPython demo and the Internationalization page on
# the wxPython wiki.
#
import builtins
import logging
import sys
import wx
from wx.lib.mixins.inspection import InspectionMixin

import app_config
from settings_dialog import EVT_CONFIG_UPDATED

appName = "Kalkulator"
__version__ = "1.0.0"

# languages you want to support
supLang = {
    "en": wx.LANGUAGE_ENGLISH,
    "es": wx.LANGUAGE_SPANISH,
}
# add translation macro to builtin similar to what gettext does

builtins.__dict__["_"] = wx.GetTranslation


# Install a custom displayhook to keep Python from setting the global
# _ (underscore) to the value of the last evaluated expression.  If
# we don't do this, our mapping of _ to gettext can get overwritten.
def _displayHook(obj):
    if obj is not None:
        print(repr(obj))


class BaseApp(wx.App, InspectionMixin):
    def OnInit(self):
        self.Init()  # InspectionMixin
        self.SetUseBestVisual(True)
        # work around for Python stealing "_"
        sys.displayhook = _displayHook

        self.__version__ = __version__
        self.AppName = appName
        self.config_file = f"{self.AppName}.ini"
        self.config = app_config.load_settings(self.config_file)

        app_config.setup_logging(self.AppName, self.config["Settings"]["LogLevel"])
        logging.debug(f"Settings loaded from '{self.config_file}'")

        self.locale = None
        wx.Locale.AddCatalogLookupPathPrefix("locale")
        self.updateLanguage(self.config["Settings"]["Language"])

        self.AppDisplayName = _("Kalkulator")
        # Me conecto al evento de cambio de configuración
        self.Bind(EVT_CONFIG_UPDATED, self.on_config_updated)
        return True

    def get_config(self):
        return app_config.get_config(self.config)

    def save_settings(self):
        app_config.save_settings(self.config, self.config_file)

    def on_config_updated(self, event):
        self.save_settings()
        logging.getLogger().setLevel(self.config["Settings"]["LogLevel"])
        event.Skip()  # Permite que el evento se propague si es necesario

    def updateLanguage(self, lang):
        """
        Update the language to the requested one.

        Make *sure* any existing locale is deleted before the new
        one is created.  The old C++ object needs to be deleted
        before the new one is created, and if we just assign a new
        instance to the old Python variable, the old C++ locale will
        not be destroyed soon enough, likely causing a crash.

        :param string `lang`: one of the supported language codes

        """
        # if an unsupported language is requested default to English
        if lang in supLang:
            selLang = supLang[lang]
        else:
            selLang = wx.LANGUAGE_ENGLISH

        if self.locale:
            assert sys.getrefcount(self.locale) <= 2
            del self.locale

        # create a locale object for this language
        self.locale = wx.Locale(selLang)
        if self.locale.IsOk():
            self.locale.AddCatalog(appName)
        else:
            self.locale = None
