"""邮件领域模块

该模块包含邮件检索的领域模型，包括：
- SearchCriteria 搜索条件
- CandidateMessage 候选邮件
- MailboxClient 客户端接口
"""
