import pytest
from graphql import build_schema

SDL = """
scalar Custom
scalar DateTime

enum Color { RED GREEN BLUE }

interface Pet {
  name: String!
}

type Dog implements Pet {
  name: String!
  barks: Boolean!
}

type Cat implements Pet {
  name: String!
  lives: Int!
}

union SearchResult = Dog | Cat | User

type User {
  id: ID!
  name: String
  age: Int
  score: Float
  active: Boolean
  color: Color
  friends: [User!]!
  pet: Pet
  custom: Custom
  joined: DateTime
}

type Query {
  hello: String
  user: User
  users: [User]
  pet: Pet
  pets: [Pet!]!
  search: [SearchResult]
  custom: Custom
  numbers: [[Int]]
  color: Color
}

type Mutation {
  rename(name: String!): User
}

type Subscription {
  tick: Int
}
"""


@pytest.fixture
def schema():
    return build_schema(SDL)
