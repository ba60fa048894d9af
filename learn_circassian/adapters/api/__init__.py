# learn_circassian\adapters\api\__init__.py
"""
Primary (Driving) Adapter: the loopback HTTP surface used by the desktop UI.
"""
