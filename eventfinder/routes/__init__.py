"""
Route blueprints. Each module exposes a factory that receives the shared
ServiceContext.
"""
