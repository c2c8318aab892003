from .ldp import blueprint as ldp_blueprint

__all__ = ['ldp_blueprint']
