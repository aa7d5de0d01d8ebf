BUILD_VERSION = "1.0.0"
APP_TITLE = "TabViz: Tabular Visualization Toolkit"
