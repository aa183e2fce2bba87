import wx
import wx.lib.newevent

from app_config import MAX_DECIMALS, SUPPORTED_LANGUAGES

global _

# Evento propio para avisar a la ventana principal de que la configuración ha cambiado.
ConfigUpdatedEvent, EVT_CONFIG_UPDATED = wx.lib.newevent.NewCommandEvent()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SettingsDialog(wx.Dialog):
    def __init__(self, parent, config):
        super().__init__(parent, wx.ID_ANY, _("Preferences"))
        # Config es el ConfigParser de la aplicación
        self.config = config

        self.InitUI()
        self.CentreOnParent()

    def InitUI(self):
        main_sizer = wx.BoxSizer(wx.VERTICAL)

        display_box = wx.StaticBoxSizer(wx.VERTICAL, self, _("Display"))
        self.add_display_controls(display_box)
        main_sizer.Add(display_box, 0, wx.EXPAND | wx.ALL, 10)

        general_box = wx.StaticBoxSizer(wx.VERTICAL, self, _("General"))
        self.add_general_controls(general_box)
        main_sizer.Add(general_box, 0, wx.EXPAND | wx.ALL, 10)

        main_sizer.Add(
            self.CreateSeparatedButtonSizer(wx.OK | wx.CANCEL),
            0,
            wx.ALIGN_CENTER | wx.TOP | wx.BOTTOM,
            10,
        )
        self.Bind(wx.EVT_BUTTON, self.on_save)

        self.SetSizerAndFit(main_sizer)

    def add_display_controls(self, sizer_parent):
        grid_sizer = wx.FlexGridSizer(rows=3, cols=2, vgap=8, hgap=15)
        grid_sizer.AddGrowableCol(1)

        grid_sizer.Add(
            wx.StaticText(self, label=_("Decimals:")),
            0,
            wx.ALIGN_CENTER_VERTICAL,
        )
        self.decimals_ctrl = wx.SpinCtrl(
            self,
            min=0,
            max=MAX_DECIMALS,
            initial=self.config.getint("Display", "decimals"),
        )
        grid_sizer.Add(self.decimals_ctrl, 1, wx.EXPAND)

        grid_sizer.Add(
            wx.StaticText(self, label=_("History size (0 = off):")),
            0,
            wx.ALIGN_CENTER_VERTICAL,
        )
        self.history_size_ctrl = wx.TextCtrl(
            self, value=str(self.config.getint("Display", "history_size"))
        )
        grid_sizer.Add(self.history_size_ctrl, 1, wx.EXPAND)

        self.show_help_chk = wx.CheckBox(self, label=_("Show supported operations"))
        self.show_help_chk.SetValue(self.config.getboolean("Display", "show_help"))
        grid_sizer.Add(self.show_help_chk, 0, wx.ALIGN_CENTER_VERTICAL)
        grid_sizer.AddSpacer(0)

        sizer_parent.Add(grid_sizer, 1, wx.EXPAND | wx.ALL, 5)

    def add_general_controls(self, sizer_parent):
        grid_sizer = wx.FlexGridSizer(rows=2, cols=2, vgap=8, hgap=15)
        grid_sizer.AddGrowableCol(1)

        grid_sizer.Add(
            wx.StaticText(self, label=_("Log level:")),
            0,
            wx.ALIGN_CENTER_VERTICAL,
        )
        self.loglevel_choice = wx.Choice(self, choices=LOG_LEVELS)
        self.loglevel_choice.SetStringSelection(self.config.get("Settings", "LogLevel"))
        grid_sizer.Add(self.loglevel_choice, 1, wx.EXPAND)

        grid_sizer.Add(
            wx.StaticText(self, label=_("Language (restart required):")),
            0,
            wx.ALIGN_CENTER_VERTICAL,
        )
        self.language_choice = wx.Choice(self, choices=list(SUPPORTED_LANGUAGES))
        self.language_choice.SetStringSelection(self.config.get("Settings", "Language"))
        grid_sizer.Add(self.language_choice, 1, wx.EXPAND)

        sizer_parent.Add(grid_sizer, 1, wx.EXPAND | wx.ALL, 5)

    def on_save(self, event):
        if event.Id == wx.ID_OK:
            try:
                # Validaciones para campos numéricos
                history_size = int(self.history_size_ctrl.GetValue())
                if history_size < 0:
                    raise ValueError(history_size)

                self.config.set(
                    "Display", "decimals", str(self.decimals_ctrl.GetValue())
                )
                self.config.set("Display", "history_size", str(history_size))
                self.config.set(
                    "Display", "show_help", str(self.show_help_chk.GetValue())
                )
                if self.loglevel_choice.GetSelection() != wx.NOT_FOUND:
                    self.config.set(
                        "Settings", "LogLevel", self.loglevel_choice.GetStringSelection()
                    )
                if self.language_choice.GetSelection() != wx.NOT_FOUND:
                    self.config.set(
                        "Settings", "Language", self.language_choice.GetStringSelection()
                    )

                # Emitir un evento personalizado para notificar a la ventana principal
                evt = ConfigUpdatedEvent(self.GetId())
                wx.PostEvent(self.GetParent(), evt)
                event.Skip()

            except ValueError as e:
                wx.MessageBox(
                    _(
                        "Format error in the data. Please enter a non-negative whole number: {e}"
                    ).format(e=e),
                    _("Validation error"),
                    wx.OK | wx.ICON_ERROR,
                )
        else:
            event.Skip()
