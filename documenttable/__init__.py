"""Document table feature: record list controller, view engine and Tkinter view."""
