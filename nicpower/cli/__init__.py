# nicpower/cli/__init__.py
