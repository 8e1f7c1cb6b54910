from dryconomy.utils.numeric import safe_number, is_finite_number

__all__ = ['safe_number', 'is_finite_number']
