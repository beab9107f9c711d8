"""
HotelOps：酒店运营数据访问服务
"""
__version__ = "1.0.0"
