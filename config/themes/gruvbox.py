theme_name = "gruvbox"

theme_data = {
    "fg": (40, 40, 40),        # ~ #282828
    "accent": (215, 153, 33),  # ~ #D79921
}
