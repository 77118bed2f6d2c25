"""Qt widgets: main window, control panels, tower canvas and benchmark chart."""
