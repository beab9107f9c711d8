"""
core - 域无关的基础层

包含：
- records: 远程记录存储抽象（RecordClient 接口、查询描述、声明式字段映射）
- notification: 通知渠道抽象（toast 分发）

app 层（hotelops）只通过这里的接口访问后端和发送通知。
"""
