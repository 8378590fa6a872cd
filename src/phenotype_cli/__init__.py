"""phenotype_cli — console front end for the phenotype_rulesets SDK.

Entry point: ``phenotype-cli`` (see :func:`phenotype_cli.app.cli`).
"""
