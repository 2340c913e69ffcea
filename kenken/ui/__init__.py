from .main_window import KenKenGame, main
