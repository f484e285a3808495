theme_name = "nord"
# Example status bar theme based on the nord color palette.
# Copy this file to ~/scrib/config/themes/ and set theme=nord in scrib.conf.
theme_data = {
    # status bar text
    "fg": (216, 222, 233),      # #D8DEE9
    # status bar background
    "accent": (136, 192, 208),  # #88C0D0
}
