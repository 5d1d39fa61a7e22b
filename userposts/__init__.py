"""User/post JSON API over a relational store."""
