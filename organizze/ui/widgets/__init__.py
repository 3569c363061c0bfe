from organizze.ui.widgets.wallpaper_backdrop import WallpaperBackdrop

__all__ = [
    "WallpaperBackdrop",
]
