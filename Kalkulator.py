import logging
import wx
import wx.adv
import app_base as ab
from expression_evaluator import evaluate
from settings_dialog import EVT_CONFIG_UPDATED, SettingsDialog
from utils import SUPPORTED_HELP, format_history_entry, format_result, trim_history


global _


class KalkFrame(wx.Frame):
    def __init__(self, parent, **kwds):
        super(KalkFrame, self).__init__(parent, **kwds)

        self.history = []

        self.panel = None
        self.expr_ctrl = None
        self.result_text = None
        self.help_text = None
        self.log_text = None

        self.ID_MNU_CLEAR_HISTORY = wx.NewIdRef()

        self.status_queue = []
        self.status_timer = wx.Timer(self)
        self.Bind(wx.EVT_TIMER, self.OnClearStatus, self.status_timer)

        self.init_ui()

        self.Bind(EVT_CONFIG_UPDATED, self.on_config_updated)
        self.Bind(wx.EVT_UPDATE_UI, self.OnUpdateUI)

    @property
    def display_config(self):
        return wx.GetApp().get_config()["Display"]

    def init_ui(self):
        """Construye la interfaz de usuario principal."""
        self.createMenu()
        self.create_layout()
        self.apply_display_config()
        self.Centre()

    def create_layout(self):
        panel = wx.Panel(self, name="main_panel")
        self.panel = panel
        main_sizer = wx.BoxSizer(wx.VERTICAL)

        main_sizer.Add(
            wx.StaticText(panel, label=_("Enter expression:")), 0, wx.ALL, 5
        )

        input_sizer = wx.BoxSizer(wx.HORIZONTAL)
        self.expr_ctrl = wx.TextCtrl(panel, style=wx.TE_PROCESS_ENTER)
        self.expr_ctrl.Bind(wx.EVT_TEXT_ENTER, self.OnCalculate)
        input_sizer.Add(self.expr_ctrl, 1, wx.EXPAND | wx.RIGHT, 5)

        calc_btn = wx.Button(panel, label=_("Calculate"))
        calc_btn.SetToolTip(_("Evaluate the expression"))
        calc_btn.Bind(wx.EVT_BUTTON, self.OnCalculate)
        input_sizer.Add(calc_btn, 0)
        main_sizer.Add(input_sizer, 0, wx.EXPAND | wx.ALL, 5)

        main_sizer.Add(wx.StaticLine(panel), 0, wx.EXPAND | wx.ALL, 5)
        self.result_text = wx.StaticText(panel, label=_("Result: "))
        main_sizer.Add(self.result_text, 0, wx.ALL, 5)

        main_sizer.Add(wx.StaticLine(panel), 0, wx.EXPAND | wx.ALL, 5)
        self.help_text = wx.StaticText(panel, label=SUPPORTED_HELP)
        main_sizer.Add(self.help_text, 0, wx.ALL, 5)

        history_box = wx.StaticBoxSizer(wx.VERTICAL, panel, _("History"))
        self.log_text = wx.TextCtrl(
            panel, style=wx.TE_MULTILINE | wx.TE_READONLY | wx.HSCROLL
        )
        history_box.Add(self.log_text, 1, wx.EXPAND)
        main_sizer.Add(history_box, 1, wx.EXPAND | wx.ALL, 5)

        panel.SetSizer(main_sizer)
        self.CreateStatusBar()

    def createMenu(self):
        # Estructura de datos: (ID, "Etiqueta\tAtajo", "Descripción para la barra de estado", manejador)
        menu_data = [
            (
                _("&File"),
                [
                    (
                        wx.ID_EXIT,
                        _("Exit\tCtrl+Q"),
                        _("Get out of application"),
                        self.OnQuit,
                    ),
                ],
            ),
            (
                _("&Edit"),
                [
                    (
                        self.ID_MNU_CLEAR_HISTORY,
                        _("Clear history\tCtrl+L"),
                        _("Remove all the previous results"),
                        self.OnClearHistory,
                    ),
                    (wx.ID_SEPARATOR,),
                    (
                        wx.ID_PREFERENCES,
                        _("Preferences\tCtrl+P"),
                        _("Open configuration dialog"),
                        self.OnConfiguracion,
                    ),
                ],
            ),
            (
                _("&Help"),
                [
                    (
                        wx.ID_ABOUT,
                        _("About\tF1"),
                        _("Application information"),
                        self.OnAbout,
                    )
                ],
            ),
        ]
        menubar = wx.MenuBar()
        for menu_label, menu_items in menu_data:
            menu = wx.Menu()
            for item_data in menu_items:
                if item_data[0] == wx.ID_SEPARATOR:
                    menu.AppendSeparator()
                else:
                    item_id, item_label, item_help, handler = item_data
                    menu_item = wx.MenuItem(menu, item_id, item_label, item_help)
                    menu.Append(menu_item)
                    self.Bind(wx.EVT_MENU, handler, menu_item)
            menubar.Append(menu, menu_label)

        self.SetMenuBar(menubar)

    def apply_display_config(self):
        display = self.display_config
        self.help_text.Show(display["show_help"])
        self.history = trim_history(self.history, display["history_size"])
        self.refresh_history()
        self.panel.Layout()

    def OnUpdateUI(self, event):
        if event.GetId() == self.ID_MNU_CLEAR_HISTORY:
            event.Enable(len(self.history) > 0)
        else:
            event.Skip()

    def OnCalculate(self, event):
        expression = self.expr_ctrl.GetValue()
        display = self.display_config
        result = evaluate(expression)
        self.result_text.SetLabel(format_result(result, display["decimals"]))
        if result.ok:
            logging.info(f"'{expression}' = {result.value!r}")
        else:
            logging.warning(f"'{expression}': {result.error.message}")
            self.set_status(result.error.message, high_priority=True)
        if display["history_size"] > 0:
            self.history.append(
                format_history_entry(expression, result, display["decimals"])
            )
            self.history = trim_history(self.history, display["history_size"])
            wx.CallAfter(self.refresh_history)
        self.panel.Layout()

    def OnClearHistory(self, event):
        logging.debug("History cleared")
        self.history = []
        self.log_text.Clear()

    def on_config_updated(self, event):
        self.apply_display_config()
        event.Skip()

    def OnConfiguracion(self, event):
        self.set_status(_("Opening configuration"))
        with SettingsDialog(self, wx.GetApp().config) as dialog:
            if dialog.ShowModal() == wx.ID_OK:
                self.set_status(_("Updated configuration"))
            else:
                self.set_status(_("Canceled by the user"))

    def OnQuit(self, event):
        self.Close()

    def OnAbout(self, event):
        about_info = wx.adv.AboutDialogInfo()
        about_info.SetVersion(wx.GetApp().__version__)
        about_info.SetDescription(
            _("A calculator for arithmetic expressions.\n") + SUPPORTED_HELP
        )
        wx.adv.AboutBox(about_info, self)

    def refresh_history(self):
        if self.log_text:
            self.log_text.SetValue("\n".join(self.history))
            self.log_text.ShowPosition(self.log_text.GetLastPosition())

    def set_status(self, msg, high_priority=False):
        if high_priority:
            self.status_timer.Stop()
            self.status_queue.insert(0, msg)
            self._show_next_status()
        else:
            self.status_queue.append(msg)
            if not self.status_timer.IsRunning():
                self._show_next_status()

    def _show_next_status(self):
        if self.status_queue:
            msg = self.status_queue.pop(0)
            self.SetStatusText(msg)
            self.status_timer.Start(3000, oneShot=True)
        else:
            self.SetStatusText("")

    def OnClearStatus(self, event):
        self._show_next_status()


def main():
    app = ab.BaseApp(redirect=False)
    frame = KalkFrame(None, title=app.AppDisplayName, size=(600, 400))
    frame.SetMinSize((400, 300))
    frame.Show()
    app.MainLoop()


if __name__ == "__main__":
    main()
