# 🏛️ fxconv/domain/__init__.py
"""🏛️ Доменний шар: чиста логіка без I/O."""
