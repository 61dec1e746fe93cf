from .panel_host import PanelHost, PointerSessionFilter

__all__ = ["PanelHost", "PointerSessionFilter"]
