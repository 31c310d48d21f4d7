"""Custom errors for the CDP engine"""

class ProtocolError(Exception):
    """Base error class for protocol errors"""
    pass

class ArithmeticError(ProtocolError):
    """Error for arithmetic overflow/underflow"""
    pass

class ConfigurationError(ProtocolError):
    """Error for invalid engine or keeper configuration"""
    pass

class InvalidAmountError(ProtocolError):
    """Error for zero or negative amounts"""
    pass

class InsufficientCollateralError(ProtocolError):
    """Error for a mint or withdrawal that breaches the mint floor"""
    pass

class UnderwaterError(ProtocolError):
    """Error for a withdrawal that leaves indebted collateral below the mint floor"""
    pass

class InsufficientBalanceError(ProtocolError):
    """Error for a burn the holder cannot cover"""
    pass

class TransferFailedError(ProtocolError):
    """Error for a rejected collateral transfer"""
    pass

class OracleUnavailableError(ProtocolError):
    """Error for a price feed that cannot serve a round"""
    pass

class NoDataError(OracleUnavailableError):
    """Error for a price feed that has never published a round"""
    pass

class InvalidPriceError(ProtocolError):
    """Error for invalid or stale price data"""
    pass

class SlippageExceededError(ProtocolError):
    """Error for a swap that cannot meet its minimum output"""
    pass

class InvalidRouteError(ProtocolError):
    """Error for a swap route the venue does not serve"""
    pass

class NoDebtError(ProtocolError):
    """Error for close or rebalance on a debt-free position"""
    pass

class UnauthorizedError(ProtocolError):
    """Error for a credential missing the required role"""

    def __init__(self, holder, role):
        super().__init__(f"{holder} is missing role {role.name}")
        self.holder = holder
        self.role = role
