"""
Rule handling for the data import.

- store: Rule store and rule file loading
- engine: Placeholder substitution and [!expr!] evaluation
"""
