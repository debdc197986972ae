"""
Adapters — side effects on the hosting CI environment.

    from setup_k6.adapters.ci import add_path, export_variable
"""
