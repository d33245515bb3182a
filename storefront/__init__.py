"""TinyPaws storefront API"""
