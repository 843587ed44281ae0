# 🧰 fxconv/shared/__init__.py
"""🧰 Спільний шар: утиліти, що не залежать від домену."""
