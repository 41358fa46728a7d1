"""宠物库存管家（鸳鸯管家）：入库、出售/死亡登记、条码查询、账号管理。"""
__version__ = "0.1.0"
