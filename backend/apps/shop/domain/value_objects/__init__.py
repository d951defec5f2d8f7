from .money import Money, round_money, to_decimal

__all__ = ['Money', 'round_money', 'to_decimal']
