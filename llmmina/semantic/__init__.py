"""Semantic runtime support: the runtime context gathered before executing an intent."""